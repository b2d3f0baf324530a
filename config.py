import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Config:
    """Application configuration"""

    # Backend chat service
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:8080')
    CHAT_ENDPOINT = os.getenv('CHAT_ENDPOINT', '/api/chat/query')
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '30'))
    SESSION_PREFIX = os.getenv('SESSION_PREFIX', 'session_')

    # App settings
    APP_TITLE = os.getenv('APP_TITLE', 'Chatbot Assistant')
    APP_ICON = os.getenv('APP_ICON', '📊')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Number display (fr-FR by default)
    NUMBER_DECIMAL_SEPARATOR = os.getenv('NUMBER_DECIMAL_SEPARATOR', ',')
    NUMBER_GROUP_SEPARATOR = os.getenv('NUMBER_GROUP_SEPARATOR', '\u202f')
    NUMBER_MAX_FRACTION_DIGITS = int(os.getenv('NUMBER_MAX_FRACTION_DIGITS', '2'))
    PERCENT_SUFFIX = os.getenv('PERCENT_SUFFIX', '%')
    EMPTY_MESSAGE = os.getenv('EMPTY_MESSAGE', 'Aucune donnée à afficher')

    @classmethod
    def get_chat_url(cls):
        """Full URL of the chat query endpoint"""
        return f"{cls.API_BASE_URL.rstrip('/')}/{cls.CHAT_ENDPOINT.lstrip('/')}"
