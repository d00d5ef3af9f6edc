"""
constants.py – Immutable project-wide constants.
Do NOT modify these at runtime. Concept-name tables live in series/concepts.py.
"""

from __future__ import annotations

# ── SEC EDGAR endpoints ──────────────────────────────────────────────────────
EDGAR_BASE_URL = "https://data.sec.gov"
EDGAR_COMPANY_FACTS_URL = f"{EDGAR_BASE_URL}/api/xbrl/companyfacts/CIK{{cik}}.json"
EDGAR_TICKER_CIK_URL = "https://www.sec.gov/files/company_tickers.json"

# ── Cache keys and lifetimes ─────────────────────────────────────────────────
FACTS_CACHE_KEY = "companyfacts:{ticker}"
CIK_CACHE_KEY = "cik:{ticker}"
TICKERS_CACHE_KEY = "all_tickers"

FACTS_TTL_SECONDS: int = 86_400      # 24 hours – raw SEC data
CIK_TTL_SECONDS: int = 604_800       # 7 days – ticker→CIK rarely changes

# ── Taxonomy ─────────────────────────────────────────────────────────────────
DEFAULT_NAMESPACE = "us-gaap"
DEFAULT_UNIT = "USD"

# ── Period duration windows (calendar days, closed intervals) ────────────────
QUARTERLY_MIN_DAYS = 70
QUARTERLY_MAX_DAYS = 120
CUMULATIVE_MIN_DAYS = 150
CUMULATIVE_MAX_DAYS = 380

ANNUAL_MIN_DAYS = 330
ANNUAL_MAX_DAYS = 380
NINE_MONTH_DAYS = 270
NINE_MONTH_TOLERANCE_DAYS = 30      # strict: |days - 270| < 30

# ── Retention ────────────────────────────────────────────────────────────────
MAX_QUARTERS = 40   # 10 years of quarters
MAX_TTM_POINTS = 37
TTM_WINDOW = 4

AMENDMENT_MARKER = "/A"
