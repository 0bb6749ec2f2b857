"""
Refresh Engine

Runs every registered checker concurrently and folds the results back
into the registry once all of them have finished.
"""

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Optional

from ups.registry import Registry
from ups.runner import ScriptRunner, ValueResult

logger = logging.getLogger(__name__)

# Upper bound on worker threads when no explicit cap is configured
DEFAULT_MAX_WORKERS = 32


@dataclass
class RefreshReport:
    """Per-application results of one refresh batch."""
    results: dict[str, ValueResult] = field(default_factory=dict)

    @property
    def checked(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> list[str]:
        return sorted(name for name, r in self.results.items() if not r.ok)

    @property
    def succeeded(self) -> list[str]:
        return sorted(name for name, r in self.results.items() if r.ok)


class RefreshEngine:
    """Fans checker invocations out over a bounded thread pool.

    Workers only run scripts; the registry is mutated afterwards on the
    calling thread, so no locking is needed. Any exception raised by a
    worker is logged and recorded as a failed result for that application
    alone.
    """

    def __init__(self, runner: ScriptRunner, max_workers: Optional[int] = None):
        self.runner = runner
        self.max_workers = max_workers

    def _pool_size(self, jobs: int) -> int:
        cap = self.max_workers or DEFAULT_MAX_WORKERS
        return max(1, min(cap, jobs))

    def refresh_all(self, registry: Registry) -> RefreshReport:
        """Re-run every checker and update each application's latest value.

        Blocks until every check has completed or failed.
        """
        report = RefreshReport()
        jobs = [(app.name, app.script_path) for app in registry]
        if not jobs:
            return report

        workers = self._pool_size(len(jobs))
        logger.debug("Refreshing %d apps with %d workers", len(jobs), workers)

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
            futs = {
                ex.submit(self.runner.run, script_path, name): name
                for name, script_path in jobs
            }
            for fut in concurrent.futures.as_completed(futs):
                name = futs[fut]
                try:
                    result = fut.result()
                except Exception as exc:
                    logger.error("Checker for %s raised", name, exc_info=exc)
                    result = ValueResult.failed(f"exception: {exc}")
                report.results[name] = result

        # Fan-in: single-threaded merge
        for name, result in report.results.items():
            registry.set_latest(name, result.value)

        return report

    def refresh_one(self, registry: Registry, name: str) -> ValueResult:
        """Re-run a single application's checker and record its latest value.

        Raises AppNotRegisteredError before spawning anything if the name
        is unknown.
        """
        app = registry.get(name)
        result = self.runner.run(app.script_path, name=name)
        registry.set_latest(name, result.value)
        return result
