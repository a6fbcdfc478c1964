"""
Tests for the error hierarchy, validation helpers and logging setup.
"""
import logging

import pytest

from forestinv.exceptions import (
    ConfigurationError,
    DataError,
    ForestAnalysisError,
    InsufficientDataError,
    InvalidArgumentError,
    InvalidDataError,
    ParameterError,
    validate_finite,
    validate_open_unit_interval,
    validate_positive,
)
from forestinv.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


class TestErrorHierarchy:

    @pytest.mark.parametrize("exc_type,parent", [
        pytest.param(ConfigurationError, ForestAnalysisError, id="configuration"),
        pytest.param(InsufficientDataError, ForestAnalysisError, id="insufficient_data"),
        pytest.param(InvalidArgumentError, ParameterError, id="invalid_argument"),
        pytest.param(InvalidDataError, DataError, id="invalid_data"),
    ])
    def test_subclassing(self, exc_type, parent):
        assert issubclass(exc_type, parent)
        assert issubclass(exc_type, ForestAnalysisError)

    def test_insufficient_data_message(self):
        err = InsufficientDataError('sampling statistics', required=2, available=1)
        assert "Not enough data" in str(err)
        assert "at least 2" in str(err)
        assert (err.operation, err.required, err.available) == ('sampling statistics', 2, 1)

    def test_invalid_argument_message(self):
        err = InvalidArgumentError('class_width', -1.0, "must be positive")
        assert str(err) == "Invalid value for parameter 'class_width': -1.0 (must be positive)"
        assert err.param_name == 'class_width'

    def test_kinds_are_distinguishable(self):
        assert not issubclass(InsufficientDataError, ParameterError)
        assert not issubclass(InvalidArgumentError, InsufficientDataError)


class TestValidators:

    def test_valid_values_returned(self):
        assert validate_finite(1.5, 'x') == 1.5
        assert validate_positive(0.1, 'x') == 0.1
        assert validate_open_unit_interval(0.5, 'x') == 0.5

    @pytest.mark.parametrize("func,args", [
        pytest.param(validate_finite, (float('inf'), 'x'), id="finite_inf"),
        pytest.param(validate_positive, (0.0, 'x'), id="positive_zero"),
        pytest.param(validate_positive, (float('nan'), 'x'), id="positive_nan"),
        pytest.param(validate_open_unit_interval, (0.0, 'x'), id="open_interval_zero"),
    ])
    def test_invalid_values(self, func, args):
        with pytest.raises(InvalidArgumentError):
            func(*args)


class TestLogging:

    def test_logger_namespacing(self):
        assert get_logger('growth').name == 'forestinv.growth'
        assert get_logger('forestinv.growth').name == 'forestinv.growth'
        assert get_logger(ROOT_LOGGER_NAME).name == 'forestinv'

    def test_setup_logging_replaces_handlers(self, tmp_path):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        original_level = root.level
        try:
            setup_logging('DEBUG')
            logger = setup_logging(logging.WARNING, log_file=tmp_path / "logs" / "run.log")
            active = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
            assert len(active) == 2
            assert logger.level == logging.WARNING

            get_logger('test').warning("written to file")
            for handler in active:
                handler.flush()
            assert "written to file" in (tmp_path / "logs" / "run.log").read_text()
        finally:
            for handler in list(root.handlers):
                if not isinstance(handler, logging.NullHandler):
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(original_level)
