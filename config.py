import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


PAYKUN_MERCHANT_ID = os.getenv("PAYKUN_MERCHANT_ID")
PAYKUN_ACCESS_TOKEN = os.getenv("PAYKUN_ACCESS_TOKEN")
PAYKUN_ENCRYPTION_KEY = os.getenv("PAYKUN_ENCRYPTION_KEY")
PAYKUN_IS_LIVE = _flag("PAYKUN_IS_LIVE")
PAYKUN_CURRENCY = os.getenv("PAYKUN_CURRENCY", "INR")
PAYKUN_SUCCESS_URL = os.getenv("PAYKUN_SUCCESS_URL")
PAYKUN_FAILURE_URL = os.getenv("PAYKUN_FAILURE_URL")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
