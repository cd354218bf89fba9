"""ORM Models — SQLAlchemy declarative rows backing the durable ledger store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every table has an autoincrement seq column: values() orders by it

Design Decisions:
    - One file per record kind for locality
    - All models imported here so Base.metadata is complete before create_all()
"""

from energy_market.models.producer import ProducerRow  # noqa: F401
from energy_market.models.consumer import ConsumerRow  # noqa: F401
from energy_market.models.energy_transaction import TransactionRow  # noqa: F401
