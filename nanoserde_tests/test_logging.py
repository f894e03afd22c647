import json
import logging
from dataclasses import dataclass

import pytest
import structlog
from structlog.testing import capture_logs

from nanoserde import U8, Array, deserialize_bin, deserialize_json, deserialize_toml, make_serde_type
from nanoserde.conf.settings import CodecSettings
from nanoserde.serialization.exceptions import OutOfDataError
from nanoserde.utils.logging import LoggingOutput, setup_logging


@pytest.fixture
def restore_logging():
    yield
    setup_logging(logging_output=LoggingOutput.NULL)
    structlog.configure(cache_logger_on_first_use=False)


def test_serde_type_built_is_logged():
    @dataclass
    class Sample:
        value: U8

    with capture_logs() as log_list:
        make_serde_type(Sample)

    built = [entry for entry in log_list if entry['event'] == 'serde type built']
    assert built
    assert built[-1]['serde_type'] == 'RecordSerdeType'
    assert built[-1]['log_level'] == 'debug'


def test_partial_array_release_is_logged():
    with capture_logs() as log_list:
        with pytest.raises(OutOfDataError):
            deserialize_bin(Array[U8, 4], b'\x01\x02')

    released = [entry for entry in log_list if entry['event'] == 'released partial array']
    assert len(released) == 1
    assert released[0]['released'] == 2
    assert released[0]['length'] == 4


def test_ignored_json_key_is_logged():
    @dataclass
    class Sample:
        value: U8

    with capture_logs() as log_list:
        assert deserialize_json(Sample, '{"value":1,"extra":2}', settings=CodecSettings()) == Sample(1)

    ignored = [entry for entry in log_list if entry['event'] == 'ignored json key']
    assert ignored == [dict(event='ignored json key', log_level='debug', key='extra', record='Sample')]


def test_toml_tables_are_logged():
    with capture_logs() as log_list:
        deserialize_toml('[[points]]\nx = 1\n[[points]]\nx = 2\n')

    appended = [entry for entry in log_list if entry['event'] == 'table appended']
    assert [entry['line'] for entry in appended] == [1, 3]
    assert all(entry['reader'] == 'toml' and entry['array'] == 'points' for entry in appended)
    parsed, = [entry for entry in log_list if entry['event'] == 'toml parsed']
    assert parsed['keys'] == 1


@pytest.mark.usefixtures('restore_logging')
def test_json_output(capsys):
    setup_logging(logging_output=LoggingOutput.JSON, debug=True)
    structlog.get_logger('nanoserde.test').info('hello', answer=42)

    line = capsys.readouterr().err.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry['event'] == 'hello'
    assert entry['answer'] == 42
    assert entry['level'] == 'info'
    assert entry['logger'] == 'nanoserde.test'


@pytest.mark.usefixtures('restore_logging')
def test_pretty_output_filters_debug_by_default(capsys):
    setup_logging(logging_output=LoggingOutput.PRETTY)
    log = structlog.get_logger('nanoserde.test')
    log.debug('hidden')
    log.warning('shown', where='here')

    err = capsys.readouterr().err
    assert 'hidden' not in err
    assert 'shown' in err
    assert 'where=here' in err
    assert logging.getLogger().level == logging.INFO
