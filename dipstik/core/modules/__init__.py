"""
Built-in vehicle inspection modules.

``build_module_registry`` is the single place where the process-wide registry
is assembled; the DI container calls it once.
"""

from functools import partial
from typing import Callable, Optional

from dipstik.core.config import Settings
from dipstik.core.framework.registry import ModuleRegistry
from dipstik.core.framework.test_runner import TestRunner
from dipstik.core.modules.comparator import ComparatorModule, build_comparator_module
from dipstik.core.modules.future_repair_outlook import (
    FutureRepairOutlookModule,
    build_future_repair_outlook_module,
)
from dipstik.core.modules.maintenance_gap_analysis import (
    MaintenanceGapAnalysisModule,
    build_maintenance_gap_analysis_module,
)
from dipstik.core.modules.market_valuation import MarketValuationModule, build_market_valuation_module
from dipstik.core.modules.routine_maintenance_schedule import (
    RoutineMaintenanceScheduleModule,
    build_routine_maintenance_schedule_module,
)
from dipstik.core.modules.total_ownership_cost import (
    TotalOwnershipCostModule,
    build_total_ownership_cost_module,
)
from dipstik.core.modules.unscheduled_repairs import (
    UnscheduledRepairsModule,
    build_unscheduled_repairs_module,
)
from dipstik.core.modules.vehicle_history import VehicleHistoryModule, build_vehicle_history_module


def build_module_registry(
    settings: Optional[Settings] = None,
    test_runner_factory: Optional[Callable[[], TestRunner]] = None,
) -> ModuleRegistry:
    """
    Create the registry with every built-in module.

    Without ``test_runner_factory`` comparisons use a ``TestRunner``
    configured from ``settings``.
    """
    isolate = settings.framework.isolate_failures if settings else True
    symmetric = settings.framework.symmetric_structure if settings else False
    if test_runner_factory is None:
        test_runner_factory = partial(TestRunner, symmetric_structure=symmetric)

    return ModuleRegistry(
        modules=[
            build_vehicle_history_module(settings),
            build_routine_maintenance_schedule_module(isolate),
            build_unscheduled_repairs_module(isolate),
            build_maintenance_gap_analysis_module(isolate),
            build_future_repair_outlook_module(isolate),
            build_market_valuation_module(isolate),
            build_total_ownership_cost_module(isolate),
            build_comparator_module(isolate),
        ],
        test_runner_factory=test_runner_factory,
    )


__all__ = [
    "ComparatorModule",
    "FutureRepairOutlookModule",
    "MaintenanceGapAnalysisModule",
    "MarketValuationModule",
    "RoutineMaintenanceScheduleModule",
    "TotalOwnershipCostModule",
    "UnscheduledRepairsModule",
    "VehicleHistoryModule",
    "build_module_registry",
]
