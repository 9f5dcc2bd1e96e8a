"""
Test runners for services and modules.

``TestRunner`` executes one service with several methods against the same
input, times each method and diffs their outputs. ``ModuleTestRunner`` runs
regression-style test cases against a whole module.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Iterable, Optional

from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.utils.time import iso_now

logger = logging.getLogger(__name__)

_MISSING = object()


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)


def _key_tag(key: Any) -> str:
    if isinstance(key, str):
        return "s:" + key
    return f"{type(key).__name__}:{key!r}"


def _normalise(value: Any) -> Any:
    """JSON-safe form that keeps dict key types apart and orders keys."""
    if isinstance(value, dict):
        pairs = sorted(
            ((_key_tag(k), _normalise(v)) for k, v in value.items()), key=lambda p: p[0]
        )
        return {"d": [[tag, v] for tag, v in pairs]}
    if isinstance(value, (list, tuple)):
        return [_normalise(v) for v in value]
    return value


def _canonical(value: Any) -> str:
    """Deterministic serialisation used for structural equality."""
    if value is _MISSING:
        return "<missing>"
    return json.dumps(_normalise(value), default=str)


class TestRunner:
    """Runs and compares the methods of a single service."""

    # Not a pytest test class despite the name.
    __test__ = False

    def __init__(self, symmetric_structure: bool = False):
        """
        Args:
            symmetric_structure: When True ``sameStructure`` requires every
                successful result to have exactly the first result's keys.
                By default a later result only has to contain them.
        """
        self.symmetric_structure = symmetric_structure

    async def test_service_method(
        self,
        service: ServiceBase,
        method_id: str,
        test_params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Execute ``service`` with ``method_id`` and time it.

        Never raises: a failure is reported with ``success=False`` and the
        error message. Elapsed time is reported either way.
        """
        params = {**(test_params or {}), "methodId": method_id}
        start = time.perf_counter()
        try:
            result = await service.execute(params)
        except Exception as exc:
            execution_time = _elapsed_ms(start)
            logger.info(
                "Method %s of service %s failed after %.1fms: %s",
                method_id,
                service.id,
                execution_time,
                exc,
            )
            return {
                "serviceId": service.id,
                "methodId": method_id,
                "success": False,
                "executionTimeMs": execution_time,
                "result": None,
                "error": str(exc),
            }

        return {
            "serviceId": service.id,
            "methodId": method_id,
            "success": True,
            "executionTimeMs": _elapsed_ms(start),
            "result": result,
            "error": None,
        }

    async def compare_service_methods(
        self,
        service: ServiceBase,
        method_ids: Iterable[str],
        test_params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Run every method in ``method_ids`` (in order, duplicates kept) with
        identical params and compare the outcomes.
        """
        method_ids = list(method_ids)
        start = time.perf_counter()

        method_results = []
        for method_id in method_ids:
            method_results.append(
                await self.test_service_method(service, method_id, test_params)
            )

        total_time = _elapsed_ms(start)

        successful = [r for r in method_results if r["success"]]
        failed = [r for r in method_results if not r["success"]]

        comparison = None
        if len(successful) > 1:
            comparison = self.compare_results([r["result"] for r in successful])

        # sorted() is stable, so ties keep input order.
        by_speed = sorted(successful, key=lambda r: r["executionTimeMs"])
        fastest = by_speed[0]["methodId"] if by_speed else None

        logger.info(
            "Compared %d method(s) of service %s: %d succeeded, fastest=%s",
            len(method_results),
            service.id,
            len(successful),
            fastest,
        )

        return {
            "serviceId": service.id,
            "serviceName": service.name,
            "methodIds": method_ids,
            "methodResults": method_results,
            "totalTime": total_time,
            "summary": {
                "total": len(method_results),
                "successful": len(successful),
                "failed": len(failed),
                "fastest": fastest,
            },
            "comparison": comparison,
        }

    def compare_results(self, results: list[Any]) -> Optional[dict[str, Any]]:
        """
        Structural diff of two or more results.

        Keys are collected from every dict result. For each key the values of
        all results are compared by canonical JSON; agreeing keys land in
        ``similarities`` and the rest in ``differences``.
        """
        if len(results) < 2:
            return None

        all_keys: dict[str, None] = {}
        for result in results:
            if isinstance(result, dict):
                all_keys.update(dict.fromkeys(result))

        similarities: list[dict[str, Any]] = []
        differences: list[dict[str, Any]] = []

        for key in all_keys:
            values = [
                r.get(key, _MISSING) if isinstance(r, dict) else _MISSING for r in results
            ]
            serialised = [_canonical(v) for v in values]
            if all(s == serialised[0] for s in serialised):
                similarities.append({"key": key, "value": _present(values[0])})
            else:
                differences.append(
                    {
                        "key": key,
                        "values": [
                            {"methodIndex": i, "value": _present(v)}
                            for i, v in enumerate(values)
                        ],
                    }
                )

        return {
            "commonKeys": list(all_keys),
            "differences": differences,
            "similarities": similarities,
            "sameStructure": self._same_structure(results),
        }

    def _same_structure(self, results: list[Any]) -> bool:
        first = results[0]
        if not isinstance(first, dict):
            return False
        first_keys = set(first)
        for result in results:
            if not isinstance(result, dict):
                return False
            keys = set(result)
            if self.symmetric_structure:
                if keys != first_keys:
                    return False
            elif not keys >= first_keys:
                return False
        return True


def _present(value: Any) -> Any:
    return None if value is _MISSING else value


class ModuleTestRunner:
    """Isolated regression runner for a single module."""

    __test__ = False

    def __init__(self, module: ModuleBase):
        self.module = module

    async def run_test(self, test_case: dict[str, Any]) -> dict[str, Any]:
        """Run one ``{"name", "input", "expected"?}`` case."""
        test_input = test_case.get("input") or {}
        expected = test_case.get("expected")
        result: dict[str, Any] = {
            "name": test_case.get("name"),
            "input": test_input,
            "expected": expected,
            "timestamp": iso_now(),
        }

        start = time.perf_counter()
        try:
            validation = self.module.validate_input(test_input)
            if not validation["valid"]:
                result["success"] = False
                result["error"] = f"Validation failed: {', '.join(validation['errors'])}"
                result["executionTimeMs"] = _elapsed_ms(start)
                return result

            output = await self.module.execute(test_input)
            result["output"] = output
            result["executionTimeMs"] = _elapsed_ms(start)

            if expected is not None:
                result["success"] = self.validate_output(output, expected)
                if not result["success"]:
                    result["error"] = "Output does not match expected result"
            else:
                result["success"] = True
        except Exception as exc:
            logger.info("Test case %r on module %s raised: %s", result["name"], self.module.id, exc)
            result["success"] = False
            result["error"] = str(exc)
            result["executionTimeMs"] = _elapsed_ms(start)

        return result

    async def run_tests(self, test_cases: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
        results = []
        for test_case in test_cases:
            results.append(await self.run_test(test_case))
        return results

    @staticmethod
    def validate_output(output: Any, expected: Any) -> bool:
        """Structural equality that keeps bools, ints and floats apart."""
        return _canonical(output) == _canonical(expected)

    @staticmethod
    def get_summary(results: list[dict[str, Any]]) -> dict[str, Any]:
        total = len(results)
        passed = sum(1 for r in results if r.get("success"))
        failed = total - passed
        total_time = sum(r.get("executionTimeMs", 0) for r in results)

        return {
            "total": total,
            "passed": passed,
            "failed": failed,
            "successRate": (passed / total) * 100 if total else 0.0,
            "averageExecutionTime": total_time / total if total else 0.0,
            "results": results,
        }
