import pytest

from gstcheck.prompting import sanitize_for_prompt


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("<script>bad</script>", "scriptbad/script"),
        ("  basmati rice  ", "basmati rice"),
        ("`rm -rf`{x}", "rm -rfx"),
        ("Paneer 200g", "Paneer 200g"),
        ("<>{}`", ""),
    ],
)
def test_sanitize_for_prompt(raw, expected):
    """Тест: удаляются ` < > { }, пробелы по краям обрезаются."""
    assert sanitize_for_prompt(raw) == expected
