import json
import logging

from pydantic import ValidationError
import pytest

from adfconvert.config import CONFIGURATION, ConverterConfiguration, get_configuration
from adfconvert.constants import LOGGER_NAME
from adfconvert.logs import setup_logging


@pytest.fixture
def clean_environment(monkeypatch, tmp_path):
    for variable in ('ADFCONVERT_LOG_FILE', 'ADFCONVERT_LOG_LEVEL', 'ADFCONVERT_TIMESTAMP_UNIT'):
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv('ADFCONVERT_CONFIG_FILE', str(tmp_path / 'missing.yaml'))
    return tmp_path


class TestConverterConfiguration:
    def test_defaults(self, clean_environment):
        configuration = ConverterConfiguration()

        assert configuration.log_level == 'WARNING'
        assert configuration.timestamp_unit == 'milliseconds'
        assert configuration.markdown.heading_style == 'ATX'
        assert configuration.markdown.alert_panels

    def test_environment_variables(self, clean_environment, monkeypatch):
        monkeypatch.setenv('ADFCONVERT_TIMESTAMP_UNIT', 'seconds')
        monkeypatch.setenv('ADFCONVERT_MARKDOWN__TASK_LISTS', 'false')

        configuration = ConverterConfiguration()

        assert configuration.timestamp_unit == 'seconds'
        assert configuration.markdown.task_lists is False

    def test_yaml_file(self, clean_environment, monkeypatch):
        config_file = clean_environment / 'config.yaml'
        config_file.write_text('log_level: debug\ndefault_status_color: purple\nmarkdown:\n  extended_marks: true\n')
        monkeypatch.setenv('ADFCONVERT_CONFIG_FILE', str(config_file))

        configuration = ConverterConfiguration()

        assert configuration.log_level == 'DEBUG'
        assert configuration.default_status_color == 'purple'
        assert configuration.markdown.extended_marks is True

    def test_invalid_log_level(self, clean_environment):
        with pytest.raises(ValidationError):
            ConverterConfiguration(log_level='LOUD')

    def test_active_configuration(self, mock_configuration):
        assert get_configuration() is mock_configuration
        assert CONFIGURATION.get() is mock_configuration


class TestSetupLogging:
    def test_logs_json_lines_to_the_configured_file(self, clean_environment, mock_configuration):
        log_file = clean_environment / 'adfconvert.log'
        configuration = mock_configuration.model_copy(update={'log_file': str(log_file), 'log_level': 'INFO'})

        logger = setup_logging(configuration)
        try:
            logger.info('converted')
            for handler in logger.handlers:
                handler.flush()
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

        assert logger is logging.getLogger(LOGGER_NAME)
        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record['message'] == 'converted'
        assert record['levelname'] == 'INFO'

    def test_environment_overrides_the_log_file(self, clean_environment, mock_configuration, monkeypatch):
        log_file = clean_environment / 'from-env.log'
        monkeypatch.setenv('ADFCONVERT_LOG_FILE', str(log_file))

        logger = setup_logging(mock_configuration)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        assert log_file.exists()

    def test_repeated_setup_keeps_one_file_handler(self, clean_environment, mock_configuration):
        log_file = clean_environment / 'adfconvert.log'
        configuration = mock_configuration.model_copy(update={'log_file': str(log_file)})

        setup_logging(configuration)
        logger = setup_logging(configuration)
        try:
            file_handlers = [handler for handler in logger.handlers if isinstance(handler, logging.FileHandler)]
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

        assert len(file_handlers) == 1
