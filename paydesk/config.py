# paydesk.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale de paydesk.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose l'URL de la source catalogue/auth, la taille de page et les timeouts HTTP
- Expose les paramètres du porte-monnaie (solde initial, devise) et du stockage local
- Sécurité cookies, CORS/hosts pour l'app FastAPI
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

# Source produits + auth (API de démonstration)
CATALOG_BASE_URL = _clean_env(os.getenv("CATALOG_BASE_URL") or "https://dummyjson.com").rstrip("/")
CATALOG_PAGE_SIZE = _int_env("CATALOG_PAGE_SIZE", 5)
HTTP_TIMEOUT_SECONDS = _int_env("HTTP_TIMEOUT_SECONDS", 10)

# Porte-monnaie local: solde initial tant que rien n'a été débité
WALLET_SEED_BALANCE = _int_env("WALLET_SEED_BALANCE", 2400)
CURRENCY_CODE = _clean_env(os.getenv("CURRENCY_CODE") or "KES")

# Code de vérification pré-rempli (démo, pas de contrôle serveur)
VERIFICATION_PREFILL = _clean_env(os.getenv("VERIFICATION_PREFILL") or "123456")

# Libellé client par défaut quand le profil est absent
DEFAULT_CUSTOMER_ID = _clean_env(os.getenv("DEFAULT_CUSTOMER_ID") or "12345678")

# Stockage local persistant: Redis si configuré, sinon mémoire du process
STORAGE_REDIS_URL = _clean_env(os.getenv("STORAGE_REDIS_URL") or "")
STORAGE_NAMESPACE = _clean_env(os.getenv("STORAGE_NAMESPACE") or "paydesk")
USE_FAKE_REDIS_FOR_TESTS = os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1"

# Sécurité (HSTS si déployé en HTTPS)
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "info")

# Écrans (chemins de redirection côté front)
BROWSE_PATH = "/dashboard"
LOGIN_PATH = "/login"
