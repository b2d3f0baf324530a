import logging

import streamlit as st
from config import Config
from src.chat_client import AnalyticsChatClient, generate_session_id, welcome_message
from src.chat_widget import inject_chat_styles, render_message
from src.formatting import FormatPolicy
from src.view_state import ViewStateController

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Page configuration
st.set_page_config(
    page_title=Config.APP_TITLE,
    page_icon=Config.APP_ICON,
    layout="centered",
)

# Initialize session state for chat
if 'session_id' not in st.session_state:
    st.session_state.session_id = generate_session_id()
if 'chat_history' not in st.session_state:
    st.session_state.chat_history = [welcome_message()]
if 'view_state' not in st.session_state:
    st.session_state.view_state = ViewStateController()

inject_chat_styles()

policy = FormatPolicy.from_config(Config)
controller = st.session_state.view_state
client = AnalyticsChatClient(session_id=st.session_state.session_id)

# Header
st.markdown(f"## {Config.APP_ICON} {Config.APP_TITLE}")
st.markdown(
    f"<div class='session-info'>Session: {st.session_state.session_id}</div>",
    unsafe_allow_html=True,
)

# Messages
for message in st.session_state.chat_history:
    render_message(message, controller, policy)

# Input
if st.button("Effacer 🗑️"):
    st.session_state.chat_history = [welcome_message()]
    controller.clear()
    st.rerun()

# chat_input empties itself once submitted
user_input = st.chat_input("Tapez votre message ici...")
if user_input:
    with st.spinner("Envoi..."):
        client.send(user_input, st.session_state.chat_history)
    st.rerun()
