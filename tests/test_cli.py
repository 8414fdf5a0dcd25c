import sys

import pytest

import run_eventframe


class TestArguments:
    @pytest.mark.unit
    @pytest.mark.parametrize("index", ["first", "-1", "1.5"])
    def test_non_numeric_edit_index_is_a_usage_error(self, monkeypatch, capsys, index):
        monkeypatch.setattr(sys, "argv", ["eventframe", "--company", "Stripe", "--edit", index, "make it neon"])
        # settings must never be loaded for a rejected command line
        monkeypatch.setattr(run_eventframe.AppSettings, "from_env", classmethod(lambda cls, environ=None: pytest.fail("settings loaded")))

        with pytest.raises(SystemExit) as exc_info:
            run_eventframe.main()

        assert exc_info.value.code == 2
        assert "--edit INDEX must be a non-negative integer" in capsys.readouterr().err

    @pytest.mark.unit
    def test_blank_company_is_a_usage_error(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["eventframe", "--company", "  "])

        with pytest.raises(SystemExit) as exc_info:
            run_eventframe.main()

        assert exc_info.value.code == 2
        assert "--company must not be empty" in capsys.readouterr().err
