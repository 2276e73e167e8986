import pytest

from xml_json_etl.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def _logging():
    # Re-bind the stdlib handler to the stream pytest is capturing for this test
    configure_logging(level="DEBUG", format_type="json", structured=False)
    yield
