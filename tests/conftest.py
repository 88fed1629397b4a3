import json
from pathlib import Path

import pytest

from adfconvert.config import CONFIGURATION, ConverterConfiguration, MarkdownConfiguration
from adfconvert.models import Doc


@pytest.fixture(autouse=True)
def mock_configuration():
    config = ConverterConfiguration(
        log_level='WARNING',
        log_file=None,
        sanitize_html=False,
        timestamp_unit='milliseconds',
        default_status_color='neutral',
        default_panel_type='info',
        markdown=MarkdownConfiguration(),
    )

    token = CONFIGURATION.set(config)

    yield config

    CONFIGURATION.reset(token)


def load_fixture(filename: str):
    fixture_path = Path(__file__).parent / 'fixtures' / filename
    with fixture_path.open(encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def adf_document_dict():
    return load_fixture('adf_document.json')


@pytest.fixture
def adf_document(adf_document_dict):
    return Doc.from_dict(adf_document_dict)


@pytest.fixture
def markdown_document():
    fixture_path = Path(__file__).parent / 'fixtures' / 'markdown_document.md'
    return fixture_path.read_text(encoding='utf-8')
