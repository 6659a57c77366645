"""
Montage des fichiers statiques de la boutique (public/: index.html, success.html, cancel.html).
Monté sur "/" en dernier: les routes API restent prioritaires.
"""
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from storefront import config

def mount_static_files(app: FastAPI, directory: Optional[Path] = None) -> bool:
    public_dir = Path(directory or config.PUBLIC_DIR)
    if not public_dir.is_dir():
        return False
    app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")
    return True
