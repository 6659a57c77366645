# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

PUBLIC_DIR = BASE_DIR / "public"

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les chemins utiles (PUBLIC_DIR, DATABASE_PATH)
- Normalise et expose les secrets Stripe et le secret admin
- Fournit les URLs de redirection du checkout

Les modules lisent `config.<NOM>` au moment de l'appel (pas d'import direct
des constantes) pour que les tests puissent les surcharger via monkeypatch.
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _int_env(name: str, default: int) -> int:
    try:
        return int(_clean_env(os.getenv(name)) or default)
    except ValueError:
        return default

def _float_env(name: str, default: float) -> float:
    try:
        return float(_clean_env(os.getenv(name)) or default)
    except ValueError:
        return default

# Serveur
PORT = _int_env("PORT", 4242)
BASE_URL = _clean_env(os.getenv("BASE_URL") or f"http://localhost:{PORT}").rstrip("/")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Stockage: un seul fichier SQLite (tables orders + reviews)
DATABASE_PATH = Path(_clean_env(os.getenv("DATABASE_PATH")) or BASE_DIR / "orders.db")

# Stripe: clé secrète et secret de signature des webhooks
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_WEBHOOK_SECRET = _clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or "")
STRIPE_WEBHOOK_TOLERANCE = _int_env("STRIPE_WEBHOOK_TOLERANCE", 300)
STRIPE_LINE_ITEMS_TIMEOUT = _float_env("STRIPE_LINE_ITEMS_TIMEOUT", 10.0)

# Pages de succès/annulation du checkout
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/success.html?session_id={CHECKOUT_SESSION_ID}")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/cancel.html")
CHECKOUT_CURRENCY = _clean_env(os.getenv("CHECKOUT_CURRENCY") or "usd").lower()

# Admin: secret en clair (ADMIN_PASSWORD) ou hash bcrypt (ADMIN_SECRET_HASH, prioritaire)
ADMIN_PASSWORD = _clean_env(os.getenv("ADMIN_PASSWORD") or "")
ADMIN_SECRET_HASH = _clean_env(os.getenv("ADMIN_SECRET_HASH") or "")

# Avis clients
REVIEW_MAX_LENGTH = _int_env("REVIEW_MAX_LENGTH", 1000)
REVIEWS_SAMPLE_SIZE = 20
