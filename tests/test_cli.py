import pytest
from PIL import Image
import pgmrle_cli

GIMP_PGM = (
    "P2\n"
    "# Created by GIMP version 2.10.30 PNM plug-in\n"
    "3 2\n"
    "255\n"
    "0\n0\n0\n7\n7\n7\n")

EXPECTED_IMAGE = (
    "const uint8_t logo_data[4] =\n"
    "{\n"
    "    0x03, 0x00, 0x03, 0x07\n"
    "};\n"
    "static const Image logo_image = {3, 2, 4, logo_data};\n")


@pytest.fixture
def pgm(tmp_path):
    path = tmp_path / "logo.pgm"
    path.write_text(GIMP_PGM)
    return str(path)


def test_image_only(pgm, capsys):
    assert pgmrle_cli.main([pgm, 'logo']) == 0
    assert capsys.readouterr().out == EXPECTED_IMAGE


def test_default_prefix(pgm, capsys):
    assert pgmrle_cli.main([pgm]) == 0
    assert 'REPLACE_ME_data[4]' in capsys.readouterr().out


def test_logo(pgm, capsys):
    assert pgmrle_cli.main(['--logo', pgm, 'logo']) == 0
    out = capsys.readouterr().out
    assert out.startswith(EXPECTED_IMAGE)
    assert 'const VariantAnimation logo = {\n    21,\n' in out
    assert 'const VariantAnimation logo_reversed = {\n    21,\n' in out
    assert out.count('&logo_image},') == 42
    assert '        {127, 31, 25, 0, &logo_image},\n' in out


def test_screensaver(pgm, capsys):
    assert pgmrle_cli.main(['--screensaver', '--screen-width', '20',
                            '--screen-height', '8', pgm, 'logo']) == 0
    out = capsys.readouterr().out
    assert 'const VariantAnimation logo = {\n    34,\n' in out
    assert out.count('&logo_image},') == 34


def test_logo_and_screensaver_conflict(pgm):
    with pytest.raises(SystemExit) as excinfo:
        pgmrle_cli.main(['--logo', '--screensaver', pgm])
    assert excinfo.value.code == 2


def test_output_file(pgm, tmp_path, capsys):
    out_path = tmp_path / "logo.h"
    assert pgmrle_cli.main(['-o', str(out_path), pgm, 'logo']) == 0
    assert out_path.read_text() == EXPECTED_IMAGE
    assert capsys.readouterr().out == ''


def test_round_trip(pgm, tmp_path):
    rt_path = tmp_path / "logo-roundtrip.png"
    assert pgmrle_cli.main(['--round-trip', str(rt_path), pgm, 'logo']) == 0
    with Image.open(rt_path) as im:
        assert im.size == (3, 2)
        assert list(im.convert('L').tobytes()) == [0, 0, 0, 7, 7, 7]


def test_keep_last(tmp_path, capsys):
    path = tmp_path / "stripes.txt"
    path.write_text("1 2 1\n2 1 2\n")
    assert pgmrle_cli.main(['--keep-last', str(path), 'stripes']) == 0
    out = capsys.readouterr().out
    assert "    0xfb, 0x01, 0x02, 0x01, 0x02, 0x01, 0xff, 0x02\n" in out


def test_malformed_input(tmp_path, capsys):
    path = tmp_path / "broken.pgm"
    path.write_text("P2\n# comment\n3 2\n255\n0\nzero\n")
    assert pgmrle_cli.main([str(path)]) == 1
    assert capsys.readouterr().out == ''


def test_missing_file(tmp_path):
    assert pgmrle_cli.main([str(tmp_path / "nope.pgm")]) == 1


def test_bad_prefix(pgm, capsys):
    assert pgmrle_cli.main([pgm, 'not-a-name']) == 1
    assert capsys.readouterr().out == ''


def test_bad_prefix_not_blamed_on_file(pgm, caplog):
    assert pgmrle_cli.main([pgm, 'not-a-name']) == 1
    messages = [record.getMessage() for record in caplog.records]
    assert any('not-a-name' in message for message in messages)
    assert not any(pgm in message for message in messages)
