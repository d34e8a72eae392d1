import os
from dotenv import load_dotenv
load_dotenv()

DEFAULT_CACHE_CONTROL = "s-maxage=300, stale-while-revalidate=300"


class Config:
    JUSTTCG_API_KEY  = os.getenv("JUSTTCG_API_KEY")
    PPT_API_KEY      = os.getenv("PPT_API_KEY")
    JUSTTCG_BASE_URL = os.getenv("JUSTTCG_BASE_URL", "https://api.justtcg.com/v1")
    TCGDEX_BASE_URL  = os.getenv("TCGDEX_BASE_URL", "https://api.tcgdex.net/v2/en")
    PPT_BASE_URL     = os.getenv("PPT_BASE_URL", "https://www.pokemonpricetracker.com/api")
    MOVERS_DEFAULT_REVISION = os.getenv("MOVERS_DEFAULT_REVISION", "justtcg")
    MOVERS_HTTP_TIMEOUT = float(os.getenv("MOVERS_HTTP_TIMEOUT", "15"))  # seconds, per request
    MOVERS_MAX_WORKERS  = int(os.getenv("MOVERS_MAX_WORKERS", "8"))      # tcgdex fan-out
    MOVERS_CACHE_CONTROL = os.getenv("MOVERS_CACHE_CONTROL", DEFAULT_CACHE_CONTROL)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
