from app.app_factory import create_app
from app.startup import configure_startup_logging

configure_startup_logging()

app = create_app()
