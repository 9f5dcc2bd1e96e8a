"""Vehicle history module wiring: methods into services, services into the module."""

from typing import Optional

from dipstik.core.config import Settings
from dipstik.core.modules.vehicle_history.events import VehicleDatabasesMethod, build_events_service
from dipstik.core.modules.vehicle_history.module import VehicleHistoryModule
from dipstik.core.modules.vehicle_history.narrative import build_narrative_service


def build_vehicle_history_module(settings: Optional[Settings] = None) -> VehicleHistoryModule:
    isolate_failures = settings.framework.isolate_failures if settings else True
    module = VehicleHistoryModule(isolate_failures=isolate_failures)

    vdb_method = None
    if settings is not None:
        vdb = settings.vehicle_databases
        vdb_method = VehicleDatabasesMethod(
            api_key=vdb.api_key,
            api_url=vdb.api_url,
            timeout=vdb.timeout,
            dev_mode=vdb.dev_mode,
        )

    module.register_service(build_events_service(vdb_method))
    module.register_service(build_narrative_service())
    return module


__all__ = ["VehicleHistoryModule", "build_vehicle_history_module"]
