import os
from pathlib import Path
from dotenv import load_dotenv

current_file_path = Path(__file__).resolve()
root_dir = current_file_path.parent.parent
env_path = root_dir / ".env.dev"

if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=True)
else:
    load_dotenv()  # Fall back to process environment / .env


class ReminderWorkerConfig:
    def __init__(self) -> None:
        self.VAPID_PUBLIC_KEY = os.getenv("VAPID_PUBLIC_KEY")
        self.VAPID_PRIVATE_KEY = os.getenv("VAPID_PRIVATE_KEY")
        self.VAPID_SUBJECT = os.getenv("VAPID_SUBJECT", "mailto:example@yourdomain.com")
        self.NOTIFICATION_ICON = os.getenv("NOTIFICATION_ICON", "/ios/192.png")
        self.NOTIFICATION_BADGE = os.getenv("NOTIFICATION_BADGE", "/ios/192.png")
        self.PUSH_TTL = int(os.getenv("PUSH_TTL", "86400"))
        self.PUSH_TIMEOUT = float(os.getenv("PUSH_TIMEOUT", "15"))

    @property
    def has_vapid_keys(self) -> bool:
        return bool(self.VAPID_PUBLIC_KEY and self.VAPID_PRIVATE_KEY)


config = ReminderWorkerConfig()
