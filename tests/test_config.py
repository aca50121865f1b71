import logging

from lox import config
from lox.evaluation.context import ExecutionContext
from lox.reader.parser import Parser
from lox.reader.scanner import scan


def test_defaults(monkeypatch):
    monkeypatch.delenv("LOX_MAX_CALL_DEPTH", raising=False)
    monkeypatch.delenv("LOX_MAX_ARGUMENTS", raising=False)
    monkeypatch.delenv("LOX_LOG_LEVEL", raising=False)
    assert config.get_max_call_depth() == 512
    assert config.get_max_arguments() == 255
    assert config.get_log_level() == logging.WARNING


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("LOX_MAX_CALL_DEPTH", "64")
    monkeypatch.setenv("LOX_MAX_ARGUMENTS", " 8 ")
    monkeypatch.setenv("LOX_LOG_LEVEL", "debug")
    assert config.get_max_call_depth() == 64
    assert config.get_max_arguments() == 8
    assert config.get_log_level() == logging.DEBUG
    assert ExecutionContext().max_call_depth == 64


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("LOX_MAX_CALL_DEPTH", "lots")
    monkeypatch.setenv("LOX_MAX_ARGUMENTS", "-3")
    monkeypatch.setenv("LOX_LOG_LEVEL", "chatty")
    assert config.get_max_call_depth() == 512
    assert config.get_max_arguments() == 255
    assert config.get_log_level() == logging.WARNING


def test_parser_reads_argument_limit(monkeypatch):
    monkeypatch.setenv("LOX_MAX_ARGUMENTS", "1")
    parser = Parser(scan("f(1, 2);"))
    parser.parse_partial()
    assert [e.message for e in parser.errors] == ["Can't have more than 1 arguments."]
