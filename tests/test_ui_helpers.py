from life_os.ui_helpers import protocol_button_label, status_label


def test_status_label():
    assert status_label(True) == "EXECUTED"
    assert status_label(False) == "PENDING"


def test_protocol_button_label():
    assert protocol_button_label("Meditate", False) == "⬜ Meditate · PENDING"
    assert protocol_button_label("Meditate", True) == "✅ Meditate · EXECUTED"
