# src/chat_widget.py
"""
Chat message and statistics item rendering for Streamlit.
Each statistics item gets its own mode switch and percent toggle.
"""

import streamlit as st

from src.chat_client import ChatMessage
from src.formatting import FormatPolicy
from src.projection import ViewMode
from src.view_state import DisplayItem, ViewStateController

MODE_LABELS = {
    ViewMode.CHART_BAR: "📊 Barres",
    ViewMode.CHART_PIE: "🥧 Camembert",
    ViewMode.TABLE: "📋 Tableau",
    ViewMode.TEXT: "📝 Texte",
}


def _on_mode_change(controller, item, widget_key):
    controller.set_mode(item, st.session_state[widget_key])


def _on_percent_change(controller, item):
    controller.toggle_percent(item)


def render_display_item(item: DisplayItem, controller: ViewStateController, policy: FormatPolicy):
    """Mode controls, then the chart / table / text for one item"""
    modes = controller.available_modes(item)
    current = controller.effective_mode(item)
    mode_key = f"mode-{item.key}"

    # Pie is absent from `modes` for matrices, so the control never offers it
    st.radio(
        "Affichage",
        options=modes,
        index=modes.index(current),
        format_func=lambda m: MODE_LABELS[m],
        key=mode_key,
        horizontal=True,
        label_visibility="collapsed",
        on_change=_on_mode_change,
        args=(controller, item, mode_key),
    )

    if controller.can_toggle_percent(item):
        st.toggle(
            "Pourcentages",
            value=controller.effective_percent(item),
            key=f"pct-{item.key}",
            on_change=_on_percent_change,
            args=(controller, item),
        )

    view = controller.view(item, policy)

    if view.is_empty:
        st.info(view.empty_message)
        return

    if view.figure is not None:
        st.plotly_chart(view.figure, use_container_width=True, key=f"chart-{item.key}")
    elif view.frame is not None:
        if item.title:
            st.markdown(f"**{item.title}**")
        st.dataframe(view.frame, use_container_width=True)
    else:
        if item.title:
            st.markdown(f"**{item.title}**")
        st.code(view.text, language=None)


def render_message(message: ChatMessage, controller: ViewStateController, policy: FormatPolicy):
    """One chat bubble with its details line and statistics items"""
    role = "user" if message.is_user else "assistant"
    with st.chat_message(role):
        if message.text:
            st.markdown(message.text)
        st.caption(message.timestamp)

        if message.details is not None:
            summary = message.details.summary()
            if summary:
                st.caption(summary)

        for item in message.items:
            render_display_item(item, controller, policy)


def inject_chat_styles():
    """Compact spacing for the per-item view controls"""
    st.markdown("""
    <style>
        div[data-testid="stChatMessage"] div[role="radiogroup"] {
            gap: 0.5rem;
        }

        div[data-testid="stChatMessage"] pre {
            font-size: 13px;
            white-space: pre-wrap;
        }

        .session-info {
            font-size: 12px;
            color: #718096;
            margin-bottom: 1rem;
        }
    </style>
    """, unsafe_allow_html=True)
