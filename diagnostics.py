"""
Diagnostics Module
Rejection bookkeeping and structured debug logging for sentence generation.
"""
import json
import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional

logger = logging.getLogger("sentencemaker")
_stream_handler: Optional[logging.Handler] = None


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a stream handler to the package logger once.

    Handlers added elsewhere (test capture, embedding apps) are left alone.

    Args:
        verbose: Emit DEBUG records (every rejection) instead of INFO

    Returns:
        The configured logger
    """
    global _stream_handler
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.propagate = False
    if _stream_handler is None or _stream_handler not in logger.handlers:
        _stream_handler = logging.StreamHandler()
        _stream_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(_stream_handler)
    _stream_handler.setLevel(level)
    return logger


def log_event(stage: str, payload: Dict):
    """Emit one JSON debug record."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(json.dumps({'stage': stage, 'payload': payload}, ensure_ascii=False))


class TraceLog:
    """Diagnostic trace of one generation call."""

    def __init__(self):
        self.entries: List[Dict] = []
        self.rejection_counts = defaultdict(int)
        self.template_fail_counts = defaultdict(int)
        self.template_success_counts = defaultdict(int)

    def record(self, reason: str, schema_id: Optional[str] = None, detail: str = ''):
        """
        Record why a candidate or schema produced nothing.

        Args:
            reason: Short machine-readable reason (e.g. 'forbidden_combination')
            schema_id: Schema being processed, if any
            detail: Human-readable context such as the rejected sentence
        """
        self.rejection_counts['rejected'] += 1
        self.rejection_counts[f'rejected_{reason}'] += 1
        if schema_id:
            self.template_fail_counts[schema_id] += 1
        entry = {
            'reason': reason,
            'schema_id': schema_id,
            'detail': detail,
            'timestamp': time.time(),
        }
        self.entries.append(entry)
        log_event('rejection', entry)

    def record_success(self, schema_id: str, sentence: str):
        self.template_success_counts[schema_id] += 1
        log_event('accepted', {'schema_id': schema_id, 'sentence': sentence})

    def reasons(self) -> List[str]:
        return [entry['reason'] for entry in self.entries]

    def flush(self, path: str):
        """Append the entries to a plain-text rejection log."""
        if not self.entries:
            return
        with open(path, 'a', encoding='utf-8') as f:
            for entry in self.entries:
                ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(entry['timestamp']))
                schema = entry.get('schema_id') or '-'
                f.write(f"[{ts}] {entry['reason']}: {schema} {entry.get('detail', '')}".rstrip() + "\n")

    def summary(self) -> Dict:
        return {
            'rejections': dict(self.rejection_counts),
            'template_failures': dict(self.template_fail_counts),
            'template_successes': dict(self.template_success_counts),
        }
