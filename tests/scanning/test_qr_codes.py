from __future__ import annotations

import io
import sys
import types
from collections import namedtuple

import pytest
from PIL import Image

from src.intern_portal.intern_portal.core.exceptions import ValidationError
from src.intern_portal.intern_portal.scanning.qr import decode_qr_image, render_qr_png


def test_render_produces_png():
    png = render_qr_png('{"applicationId": "INT-1700000000000-ABC1234"}')

    assert png.startswith(b"\x89PNG")
    assert Image.open(io.BytesIO(png)).size[0] > 100


def test_decode_round_trips_rendered_code():
    pytest.importorskip("pyzbar.pyzbar")
    text = '{"applicationId": "INT-1700000000000-ABC1234", "type": "internship-application"}'

    assert decode_qr_image(io.BytesIO(render_qr_png(text))) == text


def test_decode_blank_image_has_no_code():
    pytest.importorskip("pyzbar.pyzbar")
    buf = io.BytesIO()
    Image.new("RGB", (200, 200), "white").save(buf, format="PNG")
    buf.seek(0)

    with pytest.raises(ValidationError, match="No QR code found"):
        decode_qr_image(buf)


Decoded = namedtuple("Decoded", "data type")


def _blank_png():
    buf = io.BytesIO()
    Image.new("RGB", (50, 50), "white").save(buf, format="PNG")
    buf.seek(0)
    return buf


@pytest.fixture
def zbar_returns(monkeypatch):
    """Replace pyzbar with a module whose ``decode`` returns the given symbols."""

    def install(*symbols):
        package = types.ModuleType("pyzbar")
        module = types.ModuleType("pyzbar.pyzbar")
        module.decode = lambda image: list(symbols)
        package.pyzbar = module
        monkeypatch.setitem(sys.modules, "pyzbar", package)
        monkeypatch.setitem(sys.modules, "pyzbar.pyzbar", module)

    return install


def test_decode_non_utf8_symbol_is_invalid_code(zbar_returns):
    zbar_returns(Decoded(data=b"\xff\xfe{bad", type="QRCODE"))

    with pytest.raises(ValidationError, match="Invalid QR code"):
        decode_qr_image(_blank_png())


def test_decode_uses_first_symbol(zbar_returns):
    zbar_returns(Decoded(data=b" first \n", type="QRCODE"), Decoded(data=b"second", type="QRCODE"))

    assert decode_qr_image(_blank_png()) == "first"


def test_decode_rejects_non_image(zbar_returns):
    zbar_returns()

    with pytest.raises(ValidationError, match="not an image"):
        decode_qr_image(io.BytesIO(b"plain text, not a picture"))
