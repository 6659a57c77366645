"""
Accès aux données (orders + reviews) sur un fichier SQLite via SQLAlchemy.

Toutes les méthodes sont synchrones: les routes les appellent via
run_in_threadpool pour ne jamais bloquer la boucle d'événements.
Les erreurs SQLAlchemy sont converties en StoreError.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy import create_engine, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .models import Base, Order, Review, utc_now_iso

logger = logging.getLogger(__name__)

SAMPLE_REVIEWS = [
    "fast and easy",
    "yo this was fire dude",
    "Very easy to use and great customer support",
    "Excellent gift! My younger brother really enjoyed these",
    "My kids love them. 5 stars!",
]


class StoreError(Exception):
    """Échec d'une opération de stockage (connexion, écriture, lecture)."""


class SqlStore:
    """Stockage orders/reviews dans un fichier SQLite unique."""

    def __init__(self, path: Union[str, Path], *, echo: bool = False):
        self.path = Path(path)
        # check_same_thread=False: la session est utilisée depuis le threadpool
        self.engine = create_engine(
            f"sqlite:///{self.path}",
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    # --- Initialisation ---
    def init(self, samples: Iterable[str] = SAMPLE_REVIEWS) -> int:
        """
        Crée les tables si absentes puis sème les avis d'exemple si la table est vide.
        Idempotent: un redémarrage sur une base déjà semée n'insère rien.
        Retourne le nombre d'avis semés.
        """
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"create tables failed: {e}") from e
        return self.seed_reviews(samples)

    def seed_reviews(self, samples: Iterable[str]) -> int:
        try:
            with self.SessionLocal() as db:
                count = db.scalar(select(func.count()).select_from(Review))
                if count:
                    return 0
                now = utc_now_iso()
                rows = [Review(text=text, date=now) for text in samples]
                db.add_all(rows)
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"seed reviews failed: {e}") from e
        logger.info("Seeded %s default reviews", len(rows))
        return len(rows)

    def dispose(self) -> None:
        self.engine.dispose()

    # --- Orders ---
    def insert_order(self, order: Dict[str, Any]) -> bool:
        """
        Insère une commande, clé = id de session.
        - Une seconde insertion du même id ne fait rien (ON CONFLICT DO NOTHING).
        - Retourne True si la ligne a été créée, False si elle existait déjà.
        """
        stmt = (
            sqlite_insert(Order)
            .values(
                id=order["id"],
                email=order.get("email"),
                items=order.get("items"),
                total=order.get("total"),
                date=order.get("date") or utc_now_iso(),
            )
            .on_conflict_do_nothing(index_elements=["id"])
        )
        try:
            with self.SessionLocal() as db:
                res = db.execute(stmt)
                db.commit()
                return res.rowcount == 1
        except SQLAlchemyError as e:
            raise StoreError(f"insert order {order.get('id')} failed: {e}") from e

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        try:
            with self.SessionLocal() as db:
                row = db.get(Order, order_id)
                return row.to_dict() if row else None
        except SQLAlchemyError as e:
            raise StoreError(f"get order {order_id} failed: {e}") from e

    def list_orders(self) -> List[Dict[str, Any]]:
        """Toutes les commandes, de la plus récente à la plus ancienne."""
        try:
            with self.SessionLocal() as db:
                rows = db.scalars(select(Order).order_by(Order.date.desc(), Order.id)).all()
                return [r.to_dict() for r in rows]
        except SQLAlchemyError as e:
            raise StoreError(f"list orders failed: {e}") from e

    def count_orders(self) -> int:
        try:
            with self.SessionLocal() as db:
                return db.scalar(select(func.count()).select_from(Order)) or 0
        except SQLAlchemyError as e:
            raise StoreError(f"count orders failed: {e}") from e

    # --- Reviews ---
    def insert_review(self, text: str) -> Dict[str, Any]:
        try:
            with self.SessionLocal() as db:
                row = Review(text=text, date=utc_now_iso())
                db.add(row)
                db.commit()
                return row.to_dict()
        except SQLAlchemyError as e:
            raise StoreError(f"insert review failed: {e}") from e

    def list_reviews(self) -> List[Dict[str, Any]]:
        try:
            with self.SessionLocal() as db:
                rows = db.scalars(select(Review).order_by(Review.id)).all()
                return [r.to_dict() for r in rows]
        except SQLAlchemyError as e:
            raise StoreError(f"list reviews failed: {e}") from e

    def count_reviews(self) -> int:
        try:
            with self.SessionLocal() as db:
                return db.scalar(select(func.count()).select_from(Review)) or 0
        except SQLAlchemyError as e:
            raise StoreError(f"count reviews failed: {e}") from e
