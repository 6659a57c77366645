"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: uvicorn, gunicorn -k uvicorn.workers.UvicornWorker)
  importe `storefront.asgi:app`.
- La configuration (routes, middlewares, store) est centralisée dans storefront.app_setup.factory.
"""
import logging

from storefront.app_setup.factory import create_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()
