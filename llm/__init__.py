from .main import complete, is_configured
