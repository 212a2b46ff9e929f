import os

# Les tests ne dépendent pas d'un PostgreSQL local : SQLite fichier par test.
os.environ.setdefault("DATABASE_URL", "sqlite:///./.pytest-oms.db")

from dataclasses import dataclass, field  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from backend.app.db.base import Base  # noqa: E402
from backend.app.db.models.models_v1 import Product, Vendor, VendorProduct  # noqa: E402
from backend.app.db.session import make_engine  # noqa: E402


@pytest.fixture(scope="function")
def engine(tmp_path):
    """
    Base SQLite neuve par test, construite avec la même fabrique
    que la production (BEGIN IMMEDIATE, busy timeout).
    """
    eng = make_engine(f"sqlite:///{tmp_path / 'oms.db'}", sqlite_timeout=30.0)
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@dataclass
class Catalog:
    product_id: int
    product_name: str
    vendors: dict[str, int] = field(default_factory=dict)


@pytest.fixture
def make_offers(db_session):
    """
    make_offers("Widget", [("Vendor-1", "50.00", 100), ...]) -> Catalog

    Crée le produit, les vendeurs (dans l'ordre donné, donc ids croissants)
    et leurs lignes d'inventaire, puis commit.
    """

    def _make(product_name: str, offers: list[tuple[str, str, int]]) -> Catalog:
        product = Product(sku=product_name.upper(), name=product_name, active=True)
        db_session.add(product)
        db_session.flush()

        cat = Catalog(product_id=product.id, product_name=product_name)
        for vendor_name, price, stock in offers:
            vendor = Vendor(name=vendor_name, active=True)
            db_session.add(vendor)
            db_session.flush()
            db_session.add(
                VendorProduct(
                    vendor_id=vendor.id,
                    product_id=product.id,
                    price=Decimal(price),
                    stock=stock,
                )
            )
            cat.vendors[vendor_name] = vendor.id

        db_session.commit()
        return cat

    return _make


@pytest.fixture
def widget(make_offers) -> Catalog:
    """Vendor-1 ($50, 100), Vendor-2 ($45, 50), Vendor-3 ($40, 0)."""
    return make_offers(
        "Widget",
        [
            ("Vendor-1", "50.00", 100),
            ("Vendor-2", "45.00", 50),
            ("Vendor-3", "40.00", 0),
        ],
    )


@pytest.fixture
def read_stock(db_session):
    """
    Lecture fraîche du stock, puis fin de transaction : la session de test
    ne garde pas le verrou SQLite pendant que d'autres sessions écrivent.
    """

    def _read(vendor_id: int, product_id: int) -> int | None:
        db_session.expire_all()
        vp = db_session.get(VendorProduct, (vendor_id, product_id))
        stock = None if vp is None else vp.stock
        db_session.rollback()
        return stock

    return _read
