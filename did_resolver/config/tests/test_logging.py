import logging

from pythonjsonlogger import jsonlogger

from .. import logging as test_module
from ..settings import Settings


class TestLoggingConfigurator:
    def teardown_method(self):
        for handler in list(logging.root.handlers):
            logging.root.removeHandler(handler)
            handler.close()

    def test_configure_default(self):
        test_module.LoggingConfigurator.configure(log_level="DEBUG")
        assert logging.root.level == logging.DEBUG
        assert any(
            isinstance(handler, logging.StreamHandler)
            for handler in logging.root.handlers
        )

    def test_configure_json_with_file(self, tmp_path):
        log_file = tmp_path / "resolver.log"
        test_module.LoggingConfigurator.configure(
            log_level="info", log_file=str(log_file), json_format=True
        )
        file_handlers = [
            handler
            for handler in logging.root.handlers
            if isinstance(handler, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0].formatter, jsonlogger.JsonFormatter)

        logging.getLogger("did_resolver.test").info("hello")
        file_handlers[0].flush()
        assert '"message": "hello"' in log_file.read_text()

    def test_configure_from_settings(self):
        test_module.LoggingConfigurator.configure_from_settings(
            Settings({"log.level": "ERROR"})
        )
        assert logging.root.level == logging.ERROR
