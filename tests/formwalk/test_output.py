from __future__ import annotations

import io
import json

import pytest

from formwalk.exceptions import ConfigError
from formwalk.output import dump_result

RESULT = {"name": "café", "count": 3, "owner": {"first": "Ada"}, "tags": ["a", None]}


def test_json_output_keeps_order_and_unicode():
    stream = io.StringIO()
    dump_result(RESULT, "json", stream)

    text = stream.getvalue()
    assert json.loads(text) == RESULT
    assert "café" in text
    assert text.index('"name"') < text.index('"count"') < text.index('"owner"')


def test_yaml_output():
    stream = io.StringIO()
    dump_result(RESULT, "yaml", stream)

    text = stream.getvalue()
    assert text.startswith("name: café\n")
    assert "owner:\n  first: Ada\n" in text


def test_unknown_format():
    with pytest.raises(ConfigError):
        dump_result(RESULT, "xml", io.StringIO())
