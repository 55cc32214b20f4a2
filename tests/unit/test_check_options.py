import pytest
from pydantic import ValidationError

from schemas.requests import CheckOptions


def test_defaults() -> None:
    options = CheckOptions()

    assert options.language == "en-US"
    assert options.chunk_size == 1000
    assert options.ignore_functions == ["bibliography", "lorem"]
    assert options.rules.functions["cell"].before == "\n"
    assert options.rules.arguments["caption"].after == "\n\n"


def test_file_values_win_over_flags() -> None:
    flags = CheckOptions(language="de-DE", chunk_size=200, host="http://lt")
    from_file = CheckOptions.model_validate({"chunk_size": 500, "port": 8010})

    merged = from_file.overwrite(flags)

    assert merged.language == "de-DE"
    assert merged.host == "http://lt"
    assert merged.chunk_size == 500
    assert merged.port == "8010"


def test_unknown_options_are_rejected() -> None:
    with pytest.raises(ValidationError):
        CheckOptions.model_validate({"bogus": 1})
