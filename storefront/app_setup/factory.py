"""
Factory d’application pour les entrypoints (storefront.asgi) et les tests.
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers
from .static import mount_static_files

def create_app(store=None, *, serve_static: bool = True) -> FastAPI:
    """
    Construit l’app FastAPI.
      - store: stockage injecté (SqlStore ou substitut); sinon ouvert par le lifespan sur DATABASE_PATH.
      - middlewares (CORS, sécurité), gestionnaires d’exceptions, routers,
        puis fichiers statiques sur "/" en dernier.
    """
    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.state.store = store
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    if serve_static:
        mount_static_files(app)
    return app
