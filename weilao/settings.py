from pathlib import Path
import os
from dotenv import load_dotenv

from .i18n import LANGUAGES

# project root: one level above the package
BASE_DIR = Path(__file__).resolve().parents[1]

load_dotenv(BASE_DIR / ".env")

DEFAULT_LANG = os.getenv("WEILAO_LANG", "zh-TW")
if DEFAULT_LANG not in LANGUAGES:
    DEFAULT_LANG = "zh-TW"

LOG_LEVEL = os.getenv("WEILAO_LOG_LEVEL", "INFO").upper()

START_WITH_DEMO = os.getenv("WEILAO_START_WITH_DEMO", "0").lower() in ("1", "true", "yes")

CURRENCY_LABEL = os.getenv("WEILAO_CURRENCY", "TWD")
