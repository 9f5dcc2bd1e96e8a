"""Factory classes for generating test data."""

import uuid

from factory import Faker, LazyFunction
from factory.alchemy import SQLAlchemyModelFactory

from dipstik.core.models import ExecutionLog


class ExecutionLogFactory(SQLAlchemyModelFactory):
    """
    Factory for ExecutionLog instances.

    Only ``build()`` is used; rows are persisted through the async repository.
    """

    class Meta:
        model = ExecutionLog

    id = LazyFunction(uuid.uuid4)
    kind = Faker("random_element", elements=["execute", "compare", "test"])
    module_id = "vehicle-history"
    service_id = None
    method_ids = None
    params = LazyFunction(lambda: {"vin": "1HGCM82633A004352"})
    result = None
    success = True
    error_message = None
    duration_ms = Faker("pyfloat", min_value=0.1, max_value=500, right_digits=3)
    trace_id = LazyFunction(lambda: str(uuid.uuid4()))
