"""Unit tests for the built-in module catalog."""

import pytest

from dipstik.core.config import FrameworkSettings, Settings
from dipstik.core.framework.test_runner import ModuleTestRunner
from dipstik.core.modules import build_module_registry
from dipstik.core.modules.comparator import build_comparator_module
from dipstik.core.modules.future_repair_outlook import build_future_repair_outlook_module
from dipstik.core.modules.maintenance_gap_analysis import build_maintenance_gap_analysis_module
from dipstik.core.modules.market_valuation import build_market_valuation_module
from dipstik.core.modules.total_ownership_cost import build_total_ownership_cost_module
from dipstik.core.modules.unscheduled_repairs import build_unscheduled_repairs_module

VEHICLE = {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000}

EXPECTED_MODULES = [
    "vehicle-history",
    "routine-maintenance-schedule",
    "unscheduled-repairs",
    "maintenance-gap-analysis",
    "future-repair-outlook",
    "market-valuation",
    "total-ownership-cost",
    "comparator",
]


@pytest.mark.unit
class TestModuleCatalog:
    def test_registry_contains_every_module_in_order(self):
        registry = build_module_registry()
        assert list(registry.modules) == EXPECTED_MODULES

    def test_settings_flow_into_modules(self):
        settings = Settings(framework=FrameworkSettings(isolate_failures=False))
        registry = build_module_registry(settings)
        assert all(not m.isolate_failures for m in registry.get_all_modules())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("module_id", EXPECTED_MODULES)
    async def test_builtin_test_cases_pass(self, module_id):
        registry = build_module_registry()
        summary = await registry.run_module_tests(module_id)
        assert summary["total"] >= 1
        assert summary["failed"] == 0, [r.get("error") for r in summary["results"]]

    @pytest.mark.parametrize("module_id", EXPECTED_MODULES)
    def test_unknown_target_service_is_rejected(self, module_id):
        module = build_module_registry().get_module(module_id)
        sample = dict(module.get_test_data())
        sample.pop("testCases")
        result = module.validate_input({**sample, "serviceId": "ghost"})
        assert "Service 'ghost' not found" in result["errors"]


@pytest.mark.unit
class TestModuleValidation:
    def test_market_valuation_condition(self):
        module = build_market_valuation_module()
        assert module.validate_input({"vehicle": VEHICLE, "condition": "fair"})["valid"] is True
        result = module.validate_input({"vehicle": VEHICLE, "condition": "mint"})
        assert result["errors"] == ["condition must be one of: excellent, good, fair, poor"]

    def test_missing_vehicle(self):
        result = build_unscheduled_repairs_module().validate_input({"serviceHistory": "nope"})
        assert result["errors"] == [
            "make is required",
            "model is required",
            "year must be a valid year",
            "serviceHistory must be an array",
        ]

    def test_gap_analysis_requires_both_inputs(self):
        module = build_maintenance_gap_analysis_module()
        result = module.validate_input({"vehicle": VEHICLE})
        assert result["errors"] == [
            "recommendedSchedule is required",
            "actualServiceHistory is required",
        ]
        result = module.validate_input(
            {"vehicle": VEHICLE, "recommendedSchedule": [], "actualServiceHistory": {}}
        )
        assert result["errors"] == ["actualServiceHistory must be an array"]

    @pytest.mark.parametrize("period", [0, -3, "12", True])
    def test_forecast_period_must_be_positive_number(self, period):
        result = build_future_repair_outlook_module().validate_input(
            {"vehicle": VEHICLE, "forecastPeriod": period}
        )
        assert result["errors"] == ["forecastPeriod must be a positive number (months)"]

    def test_ownership_cost_numbers(self):
        result = build_total_ownership_cost_module().validate_input(
            {"vehicle": VEHICLE, "purchasePrice": -1, "ownershipPeriod": 0, "serviceHistory": 3}
        )
        assert result["errors"] == [
            "purchasePrice must be a non-negative number",
            "ownershipPeriod must be a positive number (years)",
            "serviceHistory must be an array",
        ]

    def test_comparator_needs_two_valid_vehicles(self):
        module = build_comparator_module()
        assert module.validate_input({"vehicles": "x"})["errors"] == ["vehicles must be an array"]
        assert module.validate_input({"vehicles": [VEHICLE]})["errors"] == [
            "At least 2 vehicles are required for comparison"
        ]
        result = module.validate_input(
            {"vehicles": [VEHICLE, {"make": "Toyota", "year": 2020}], "comparisonMetrics": "cost"}
        )
        assert result["errors"] == [
            "Vehicle 2: model is required",
            "comparisonMetrics must be an array",
        ]


@pytest.mark.unit
class TestBaselineMethods:
    @pytest.mark.asyncio
    async def test_gap_analysis_flags_missing_items(self):
        module = build_maintenance_gap_analysis_module()
        result = await module.execute(
            {
                "serviceId": "gaps",
                "serviceConfig": {"gaps": {"methodId": "keyword-match"}},
                "vehicle": VEHICLE,
                "recommendedSchedule": [{"service": "Oil change"}, "Brake fluid"],
                "actualServiceHistory": [{"description": "Oil change and filter"}],
            }
        )
        assert [g["item"] for g in result["gaps"]] == ["Brake fluid"]

    @pytest.mark.asyncio
    async def test_comparator_highlights(self):
        module = build_comparator_module()
        result = await module.execute(
            {
                "serviceId": "side-by-side",
                "serviceConfig": {"side-by-side": {"methodId": "attribute-table"}},
                "vehicles": [
                    VEHICLE,
                    {"make": "Toyota", "model": "Corolla", "year": 2021, "mileage": 61000},
                ],
            }
        )
        assert result["table"][1]["label"] == "2021 Toyota Corolla"
        assert result["highlights"] == {"newest": 1, "lowestMileage": 0}

    @pytest.mark.asyncio
    async def test_ownership_cost_defaults(self):
        module = build_total_ownership_cost_module()
        result = await module.execute(
            {
                "serviceId": "cost-breakdown",
                "serviceConfig": {"cost-breakdown": {"methodId": "baseline"}},
                "vehicle": VEHICLE,
                "purchasePrice": 18000,
            }
        )
        assert result["ownershipPeriod"] == 5
        assert result["totalCost"] is None
        assert result["breakdown"]["purchase"] == 18000

    @pytest.mark.asyncio
    async def test_validate_then_execute_with_module_test_runner(self):
        runner = ModuleTestRunner(build_market_valuation_module())
        result = await runner.run_test(
            {"name": "bad condition", "input": {"vehicle": VEHICLE, "condition": "mint"}}
        )
        assert result["error"].startswith("Validation failed: condition must be one of")
