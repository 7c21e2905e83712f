from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Sequence

import structlog

from keysift.codec import normalize_nfkd
from keysift.minikey import check_mini_key
from keysift.outcome import ValidationOutcome
from keysift.report import Report
from keysift.validator import check_address, check_bip38, check_private_key

log = structlog.get_logger()

CheckFn = Callable[[str], ValidationOutcome]

CHECKERS: Dict[str, CheckFn] = {
    "key": check_private_key,
    "address": check_address,
    "bip38": check_bip38,
    "mini": check_mini_key,
}


def load_candidates(file_path: str) -> List[str]:
    """One NFKD-normalised candidate per line; blank lines and '#' comments are skipped."""
    with open(file_path, "r", encoding="utf-8") as f:
        lines = [normalize_nfkd(line.strip())[1] for line in f]
    return [line for line in lines if line and not line.startswith("#")]


def split_evenly(items: Sequence[str], count: int) -> List[List[str]]:
    """Split items into at most count contiguous shares whose sizes differ by at most one."""
    count = max(1, min(count, len(items)))
    size, extra = divmod(len(items), count)
    shares = []
    start = 0
    for i in range(count):
        end = start + size + (1 if i < extra else 0)
        shares.append(list(items[start:end]))
        start = end
    return shares


def scan_share(report: Report, check: CheckFn, share: List[str], index: int) -> int:
    """Check every candidate in one share, then advance the report by one step."""
    found = 0
    for candidate in share:
        if check(candidate).ok:
            found += 1
            report.found_any_result = True
            report.add_message_safe(f"Found a valid candidate: {candidate}")
    log.info("scan.partition_done", partition=index, checked=len(share), found=found)
    report.increment_progress()
    return found


def run_scan(report: Report, candidates: Sequence[str], kind: str, partitions: int) -> bool:
    """
    Validate complete candidates in parallel and drive the report through one run.
    Returns True if at least one candidate was valid.
    """
    if kind not in CHECKERS:
        raise ValueError(f"Unknown candidate kind: {kind}")
    check = CHECKERS[kind]

    report.init()
    if not candidates:
        return report.fail("There are no candidates to check.")

    report.set_total(len(candidates))
    shares = split_evenly(candidates, partitions)
    report.set_progress_step(len(shares))

    with ThreadPoolExecutor(max_workers=len(shares)) as executor:
        futures = [executor.submit(scan_share, report, check, share, i) for i, share in enumerate(shares)]
        found = sum(f.result() for f in futures)

    log.info("scan.done", kind=kind, candidates=len(candidates), partitions=len(shares), found=found)
    return report.finalize()


def run_scan_and_close(report: Report, candidates: Sequence[str], kind: str, partitions: int) -> bool:
    try:
        return run_scan(report, candidates, kind, partitions)
    finally:
        report.close()
