import logging

from doglicense.api.core.logging import PIIRedactor, setup_logging


def make_record(msg, *args) -> logging.LogRecord:
    return logging.LogRecord("doglicense", logging.INFO, __file__, 1, msg, args, None)


def test_phone_numbers_are_redacted():
    record = make_record("Owner called from (555) 123-4567 and +1 555.987.6543")
    PIIRedactor().filter(record)
    assert "123-4567" not in record.getMessage()
    assert record.getMessage().count("[REDACTED]") == 2


def test_redaction_applies_to_arguments():
    record = make_record("phone=%s id=%s", "5551234567", "DOG-1760887800000-42")
    PIIRedactor().filter(record)
    assert record.getMessage() == "phone=[REDACTED] id=DOG-1760887800000-42"


def test_setup_logging_installs_one_redactor_per_handler():
    setup_logging("INFO")
    setup_logging("INFO")
    targets = list(logging.getLogger().handlers) + [logging.getLogger("uvicorn.access")]
    assert targets
    for target in targets:
        assert sum(isinstance(f, PIIRedactor) for f in target.filters) == 1
