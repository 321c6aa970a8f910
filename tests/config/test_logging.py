"""Log line formatting with structured context."""

import logging

from hybrid_index.config.logging import ContextFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("hybrid_index.test", logging.INFO, __file__, 1, "Index created", (), None)
    record.__dict__.update(extra)
    return record


def test_context_fields_are_appended():
    line = ContextFormatter("%(levelname)s | %(message)s").format(_record(index_name="idx", dimension=8))
    assert line == "INFO | Index created | index_name=idx dimension=8"


def test_plain_record_has_no_context_suffix():
    assert ContextFormatter("%(message)s").format(_record()) == "Index created"


def test_configure_logging_sets_level_and_quiets_third_parties():
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("opensearch").level == logging.WARNING
    configure_logging("warning")
