"""测试解码、缩放以及 dwebp 外部编解码器。"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from PIL import Image

from iconsync.core.config import SyncConfig
from iconsync.core.exceptions import IconResizeError, InvalidConfigurationError, UpscaleNotAllowedError
from iconsync.core.models import DecodedImage
from iconsync.processing.codecs import (
    DwebpCodec,
    PillowCodec,
    create_codec,
    parse_pam_header,
)
from iconsync.processing.resizer import resize_icon

from conftest import make_icon

PAM_HEADER = b"P7\nWIDTH 192\nHEIGHT 160\nDEPTH 4\nMAXVAL 255\nTUPLTYPE RGB_ALPHA\nENDHDR\n"


def test_resize_produces_exact_square_and_keeps_alpha() -> None:
    source = make_icon(192)

    resized = resize_icon(source, 87)

    assert resized.size == (87, 87)
    assert resized.mode == "RGBA"
    assert resized.getpixel((0, 0))[3] == 0
    assert resized.getpixel((43, 43))[3] == 255


def test_resize_converts_rgb_source_to_rgba() -> None:
    resized = resize_icon(Image.new("RGB", (64, 64), "red"), 40)

    assert resized.mode == "RGBA"
    assert resized.size == (40, 40)


def test_resize_refuses_upscale() -> None:
    with pytest.raises(UpscaleNotAllowedError):
        resize_icon(make_icon(48), 60)


def test_resize_rejects_non_positive_size() -> None:
    with pytest.raises(IconResizeError):
        resize_icon(make_icon(48), 0)


def test_pillow_decode_reports_native_size(tmp_path: Path, write_icon) -> None:
    path = write_icon(tmp_path / "ic_launcher.webp", 108)

    result = PillowCodec().decode(path)

    assert result.ok
    assert result.image is not None
    assert (result.image.width, result.image.height) == (108, 108)
    assert result.image.payload.mode == "RGBA"
    result.image.close()


@pytest.mark.parametrize("content", [b"", b"not an image at all"])
def test_pillow_decode_failure_is_returned_not_raised(tmp_path: Path, content: bytes) -> None:
    path = tmp_path / "ic_launcher.webp"
    path.write_bytes(content)

    result = PillowCodec().decode(path)

    assert not result.ok
    assert result.error is not None and str(path) in result.error


def test_pillow_render_writes_png(tmp_path: Path, write_icon) -> None:
    codec = PillowCodec()
    decoded = codec.decode(write_icon(tmp_path / "src.webp", 120)).image
    assert decoded is not None
    destination = tmp_path / "Icon-App-20x20@3x.png"

    codec.render(decoded, 60, destination)
    decoded.close()

    with Image.open(destination) as img:
        assert img.format == "PNG"
        assert img.size == (60, 60)
        assert img.mode == "RGBA"


def test_pillow_render_after_close_fails(tmp_path: Path, write_icon) -> None:
    codec = PillowCodec()
    decoded = codec.decode(write_icon(tmp_path / "src.webp", 64)).image
    assert decoded is not None
    decoded.close()

    with pytest.raises(IconResizeError):
        codec.render(decoded, 40, tmp_path / "out.png")


def test_parse_pam_header() -> None:
    assert parse_pam_header(PAM_HEADER + b"\x00" * 16) == (192, 160)
    assert parse_pam_header(b"P6\n192 192\n255\n") is None
    assert parse_pam_header(b"P7\nWIDTH 0\nHEIGHT 10\nENDHDR\n") is None
    assert parse_pam_header(b"") is None


def test_dwebp_decode_uses_pam_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "ic_launcher.webp"
    source.write_bytes(b"webp bytes")
    calls: list[list[str]] = []

    def fake_run(command, capture_output, check):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout=PAM_HEADER + b"\xff" * 32, stderr=b"")

    monkeypatch.setattr("iconsync.processing.codecs.subprocess.run", fake_run)

    result = DwebpCodec("/opt/bin/dwebp").decode(source)

    assert result.ok
    assert result.image is not None
    assert (result.image.width, result.image.height) == (192, 160)
    assert calls == [["/opt/bin/dwebp", str(source), "-pam", "-o", "-"]]


def test_dwebp_decode_reports_missing_binary(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "ic_launcher.webp"
    source.write_bytes(b"webp bytes")

    def fake_run(command, capture_output, check):
        raise FileNotFoundError(command[0])

    monkeypatch.setattr("iconsync.processing.codecs.subprocess.run", fake_run)

    result = DwebpCodec().decode(source)

    assert not result.ok
    assert result.error is not None and "dwebp" in result.error


def test_dwebp_decode_reports_non_zero_exit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "ic_launcher.webp"
    source.write_bytes(b"garbage")

    def fake_run(command, capture_output, check):
        return subprocess.CompletedProcess(command, 255, stdout=b"", stderr=b"Decoding of ic_launcher.webp failed.")

    monkeypatch.setattr("iconsync.processing.codecs.subprocess.run", fake_run)

    result = DwebpCodec().decode(source)

    assert not result.ok
    assert result.error is not None and "Decoding of ic_launcher.webp failed." in result.error


def test_dwebp_decode_rejects_empty_file_without_running(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "ic_launcher.webp"
    source.write_bytes(b"")

    def fake_run(command, capture_output, check):
        raise AssertionError("dwebp should not run for an empty file")

    monkeypatch.setattr("iconsync.processing.codecs.subprocess.run", fake_run)

    assert not DwebpCodec().decode(source).ok


def test_dwebp_render_builds_resize_command(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(command, capture_output, check):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout=b"", stderr=b"")

    monkeypatch.setattr("iconsync.processing.codecs.subprocess.run", fake_run)
    decoded = DecodedImage(source_path=tmp_path / "src.webp", width=192, height=192)
    destination = tmp_path / "Icon-App-60x60@3x.png"

    DwebpCodec().render(decoded, 180, destination)

    assert calls == [
        ["dwebp", "-resize", "180", "180", str(tmp_path / "src.webp"), "-o", str(destination)]
    ]


def test_dwebp_render_failure_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, capture_output, check):
        return subprocess.CompletedProcess(command, 1, stdout=b"", stderr=b"boom")

    monkeypatch.setattr("iconsync.processing.codecs.subprocess.run", fake_run)
    decoded = DecodedImage(source_path=tmp_path / "src.webp", width=192, height=192)

    with pytest.raises(IconResizeError, match="boom"):
        DwebpCodec().render(decoded, 120, tmp_path / "out.png")


def test_dwebp_render_refuses_upscale(tmp_path: Path) -> None:
    decoded = DecodedImage(source_path=tmp_path / "src.webp", width=48, height=48)

    with pytest.raises(UpscaleNotAllowedError):
        DwebpCodec().render(decoded, 60, tmp_path / "out.png")


def test_create_codec_selects_by_name(tmp_path: Path) -> None:
    assert isinstance(create_codec(SyncConfig(codec="pillow")), PillowCodec)

    dwebp = create_codec(SyncConfig(codec="dwebp", dwebp_path="/usr/local/bin/dwebp"))
    assert isinstance(dwebp, DwebpCodec)
    assert dwebp.executable == "/usr/local/bin/dwebp"

    with pytest.raises(InvalidConfigurationError):
        create_codec(SyncConfig(codec="imagemagick"))
