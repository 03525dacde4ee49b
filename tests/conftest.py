from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tredcental.constants import AVAILABLE_GEAR
from tredcental.services.catalog import Catalog
from tredcental.services.payment_qr import PaymentCodeFlow, PaymentCodeProvider
from tredcental.services.session import RentalSession
from tredcental.web.main import create_app


def gear(gear_id: int):
    return next(g for g in AVAILABLE_GEAR if g.id == gear_id)


@pytest.fixture
def tent():
    return gear(1)  # 50000/day


@pytest.fixture
def sleeping_bag():
    return gear(2)  # 25000/day


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def fast_flow():
    return PaymentCodeFlow(PaymentCodeProvider(delay=0))


@pytest.fixture
def session(fast_flow):
    return RentalSession(payment=fast_flow)


@pytest.fixture
def client(tmp_path, session, catalog):
    app = create_app(session=session, catalog=catalog, export_dir=str(tmp_path))
    with TestClient(app) as c:
        yield c
