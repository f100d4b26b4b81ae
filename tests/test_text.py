"""Tests for text helpers."""

from expensify.utils.text import clean, extract_last4, fold, pad_last4, strip_to_text


def test_clean_collapses_whitespace():
    """Test that whitespace runs collapse to one space."""
    assert clean("  DIDI \n  RIDES\tEC  ") == "DIDI RIDES EC"
    assert clean("") == ""
    assert clean(None) == ""


def test_fold_is_case_and_accent_insensitive():
    """Test that fold lowercases and strips accents."""
    assert fold("Consumo Tarjeta de  CRÉDITO") == "consumo tarjeta de credito"


def test_extract_last4_masked_card():
    """Test trailing digits of masked card numbers."""
    assert extract_last4("554574XXXXXXX439") == "439"
    assert extract_last4("XXX3733") == "3733"
    assert extract_last4("XXXXXX2801") == "2801"


def test_extract_last4_no_digits():
    """Test that text without trailing digits yields None."""
    assert extract_last4("XXXX") is None
    assert extract_last4("") is None
    assert extract_last4("12") is None


def test_pad_last4():
    """Test left padding to four digits."""
    assert pad_last4("439") == "0439"
    assert pad_last4("3733") == "3733"
    assert pad_last4("90214") == "0214"
    assert pad_last4(None) is None


def test_strip_to_text_removes_scripts_and_empty_lines():
    """Test HTML flattening."""
    html = "<div>\n<script>var x = 1;</script>\n<p>Valor:   USD 1.54</p>\n\n<img src='x.png'>\n<p>Fin</p>\n</div>"
    assert strip_to_text(html) == "Valor: USD 1.54\nFin"
