import secrets
from typing import Optional

import bcrypt
from fastapi import HTTPException, Request

from storefront import config

def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None

def check_admin_secret(candidate: Optional[str]) -> bool:
    """
    Compare le secret fourni au secret admin du serveur.
    - ADMIN_SECRET_HASH (bcrypt) prioritaire, sinon ADMIN_PASSWORD en temps constant.
    - Aucun secret configuré: toujours refusé.
    """
    if not candidate:
        return False
    if config.ADMIN_SECRET_HASH:
        try:
            return bcrypt.checkpw(candidate.encode("utf-8"), config.ADMIN_SECRET_HASH.encode("utf-8"))
        except ValueError:
            # Hash mal formé dans l'environnement
            return False
    if config.ADMIN_PASSWORD:
        return secrets.compare_digest(candidate.encode("utf-8"), config.ADMIN_PASSWORD.encode("utf-8"))
    return False

def require_admin(request: Request) -> None:
    if not check_admin_secret(bearer_token(request)):
        raise HTTPException(status_code=401, detail="Unauthorized")
