from apps.application import build_application
from apps.settings import AppConfig

app = build_application(AppConfig())
