# iptally/pipeline.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from iptally.datasources.access_log import read_logs
from iptally.errors import ErrorKind, IpTallyError
from iptally.models import CountTable, ParameterSet
from iptally.params import resolve
from iptally.processing.filter import filter_records
from iptally.processing.stats import count_requests
from iptally.report.export import write_report
from iptally.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    """
    Outcome of one pipeline run: either the written counts or the error
    that stopped it.
    """

    params: Optional[ParameterSet] = None
    counts: Optional[CountTable] = None
    error: Optional[IpTallyError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind


def run(params: ParameterSet) -> RunResult:
    """
    Read -> filter -> count -> write, stopping at the first failing stage.
    """
    try:
        records = read_logs(params.log_file_path)
        records = filter_records(records, params.address_start, params.address_mask)
        counts = count_requests(records)
        write_report(params.output_file_path, counts)
    except IpTallyError as e:
        log.debug("Pipeline stopped with %s: %s", e.kind.value, e)
        return RunResult(params=params, error=e)

    log.info("Wrote %d addresses to %s", len(counts), params.output_file_path)
    return RunResult(params=params, counts=counts)


def run_from_sources(
        args: Sequence[str],
        config: Mapping[str, Optional[str]],
        env: Mapping[str, Optional[str]],
) -> RunResult:
    """Resolve parameters from the three sources, then run the pipeline."""
    try:
        params = resolve(args, config, env)
    except IpTallyError as e:
        return RunResult(error=e)
    return run(params)
