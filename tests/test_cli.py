from typer.testing import CliRunner

from cipherbrute.classical.monoalphabetic.caesar import CaesarCipher
from cipherbrute.cli import app

runner = CliRunner()

PLAIN = "the cat sat on the road and the dog ran to the park."


def test_ciphers_command():
    result = runner.invoke(app, ["ciphers"])
    assert result.exit_code == 0
    assert "vigenere" in result.output
    assert "searched in parallel" in result.output
    assert "encrypt/decrypt only" in result.output


def test_encrypt_and_decrypt():
    result = runner.invoke(app, ["encrypt", "-c", "caesar", "-k", "3", "abc xyz"])
    assert result.exit_code == 0
    assert result.output == "def ABC\n"

    result = runner.invoke(app, ["decrypt", "-c", "vigenere", "-k", "key", "riJvs UyvJn"])
    assert result.exit_code == 0
    assert result.output == "hello world\n"


def test_bad_key_is_usage_error():
    result = runner.invoke(app, ["encrypt", "-c", "affine", "-k", "2,3", "abc"])
    assert result.exit_code == 2


def test_unknown_cipher_is_usage_error():
    result = runner.invoke(app, ["encrypt", "-c", "enigma", "-k", "1", "abc"])
    assert result.exit_code == 2


def test_analyze():
    result = runner.invoke(app, ["analyze", PLAIN])
    assert result.exit_code == 0
    assert "Dictionary Matching:" in result.output
    assert "3-gram Analysis:" in result.output
    assert "Combined:" in result.output


def test_crack():
    ct = CaesarCipher(7).encrypt(PLAIN)
    result = runner.invoke(app, ["crack", ct, "-c", "caesar", "-t", "3"])
    assert result.exit_code == 0
    assert "#1  cipher=caesar" in result.output
    assert "key=shift=7" in result.output
    assert PLAIN in result.output
    assert "#4" not in result.output


def test_crack_rejects_zero_workers():
    result = runner.invoke(app, ["crack", "abc", "-w", "0"])
    assert result.exit_code == 2


def test_crack_rejects_unsearchable_cipher():
    result = runner.invoke(app, ["crack", "abc", "-c", "playfair"])
    assert result.exit_code == 2


def test_batch_writes_report(tmp_path):
    inputs = tmp_path / "INPUT"
    inputs.mkdir()
    (inputs / "one.txt").write_text(CaesarCipher(5).encrypt(PLAIN), encoding="utf-8")
    (inputs / "two.txt").write_text(CaesarCipher(11).encrypt(PLAIN), encoding="utf-8")
    out = tmp_path / "output.md"

    result = runner.invoke(app, ["batch", str(inputs), "-o", str(out), "-c", "caesar", "-t", "2"])
    assert result.exit_code == 0
    assert "Found 2 text files" in result.output
    assert "Caesar [shift=5]" in result.output
    report = out.read_text(encoding="utf-8")
    assert report.index("# one.txt") < report.index("# two.txt")
    assert "- Key: shift=11" in report


def test_batch_empty_directory(tmp_path):
    result = runner.invoke(app, ["batch", str(tmp_path), "-o", str(tmp_path / "out.md")])
    assert result.exit_code == 0
    assert "No *.txt files found" in result.output
    assert not (tmp_path / "out.md").exists()


def test_batch_missing_directory(tmp_path):
    result = runner.invoke(app, ["batch", str(tmp_path / "missing")])
    assert result.exit_code == 2
