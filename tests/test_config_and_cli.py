"""
Test module for run configuration and the command line.
File: tests/test_config_and_cli.py
"""

import pytest
from pathlib import Path

from pdf_embedder import cli
from pdf_embedder.core.config import (
    EmbedConfig,
    clean_text,
    config_from_args,
    output_extension,
    validate_config,
)
from pdf_embedder.core.exceptions import UserCancelled
from pdf_embedder.host import DEFAULT_HOST
from pdf_embedder.matcher.rules import get_rule, get_default_rule, rule_names, EXTRACTION_RULES


@pytest.fixture(autouse=True)
def keep_pytest_sigint_handler(monkeypatch):
    monkeypatch.setattr(cli, 'setup_signal_handlers', lambda: None)


def parse(*argv):
    return cli.build_parser().parse_args(list(argv))


# Rules

def test_rule_order_and_default():
    assert rule_names() == ['Loft|Ann', 'CBK', 'NY&CO', 'UNIQLO', 'Cacique']
    assert get_default_rule().name == 'CBK'
    assert all(rule.key_expression.groups >= 1 for rule in EXTRACTION_RULES)


def test_get_rule_is_case_insensitive():
    assert get_rule('uniqlo').name == 'UNIQLO'
    assert get_rule(' loft|ann ').name == 'Loft|Ann'
    with pytest.raises(ValueError):
        get_rule('Gap')


# Config

def test_clean_text():
    assert clean_text(None) is None
    assert clean_text("   ") is None
    assert clean_text("  Tech Pack ") == "Tech Pack"


def test_output_extension():
    assert output_extension('PSD') == 'psd'
    assert output_extension('tiff') == 'tif'
    with pytest.raises(ValueError):
        output_extension('PNG')


def test_config_from_args(tmp_path):
    args = parse(str(tmp_path), '--output', str(tmp_path / 'out'),
                 '--pattern', 'cacique', '--file-type', 'TIFF',
                 '--pdf-layer-name', '  ', '--jpeg-layer-name', ' Swatch ',
                 '--keyword', 'SS21', '--keyword', ' ', '--text-layer', 'PROOF',
                 '--max-pages', '20', '--no-log')
    config = config_from_args(args)

    assert config.source_folder == tmp_path
    assert config.output_folder == tmp_path / 'out'
    assert config.log_folder == tmp_path
    assert config.rule.name == 'Cacique'
    assert config.output_format == 'TIFF'
    assert config.pdf_layer_name is None
    assert config.jpeg_layer_name == 'Swatch'
    assert config.keywords == ('SS21',)
    assert config.text_contents == 'PROOF'
    assert config.max_pages == 20
    assert config.log_enabled is False
    assert config.notify_when_done is True
    assert config.host == DEFAULT_HOST
    assert config.pdf_folder is None


def test_config_is_immutable(tmp_path):
    config = EmbedConfig(tmp_path, tmp_path / 'out', get_default_rule())
    with pytest.raises(AttributeError):
        config.max_pages = 5


def test_unknown_pattern_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        config_from_args(parse(str(tmp_path), '--output', str(tmp_path), '--pattern', 'Gap'))


def test_validate_config(tmp_path):
    rule = get_default_rule()
    assert validate_config(EmbedConfig(tmp_path, tmp_path / 'out', rule)) == (True, "")

    is_valid, message = validate_config(EmbedConfig(tmp_path / 'missing', tmp_path, rule))
    assert not is_valid and 'Source folder' in message

    is_valid, message = validate_config(EmbedConfig(tmp_path, tmp_path, rule, pdf_folder=tmp_path / 'x'))
    assert not is_valid and 'PDF folder' in message

    is_valid, _ = validate_config(EmbedConfig(tmp_path, tmp_path, rule, max_pages=0))
    assert not is_valid

    is_valid, _ = validate_config(EmbedConfig(tmp_path, tmp_path, rule, output_format='PNG'))
    assert not is_valid


# CLI

def test_cancelled_prompt(monkeypatch):
    def cancel(*args, **kwargs):
        raise KeyboardInterrupt
    monkeypatch.setattr(cli.Prompt, 'ask', cancel)

    with pytest.raises(UserCancelled):
        cli.ask_for_folder('source')


def test_blank_prompt_answer_cancels(monkeypatch):
    monkeypatch.setattr(cli.Prompt, 'ask', lambda *a, **k: '  ')
    with pytest.raises(UserCancelled):
        cli.ask_for_folder('output')


def test_missing_folders_are_asked_for(monkeypatch, tmp_path):
    answers = iter([str(tmp_path / 'src'), str(tmp_path / 'out')])
    monkeypatch.setattr(cli.Prompt, 'ask', lambda *a, **k: next(answers))

    args = cli.fill_missing_folders(parse())
    assert args.source_folder == tmp_path / 'src'
    assert args.output == tmp_path / 'out'


def test_main_cancel_exits_quietly(monkeypatch, capsys):
    monkeypatch.setattr(cli.Prompt, 'ask', lambda *a, **k: '')
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == cli.EXIT_CANCELLED
    assert 'Error' not in capsys.readouterr().out


def test_main_rejects_missing_source(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(tmp_path / 'missing'), '--output', str(tmp_path)])
    assert exc_info.value.code == cli.EXIT_ERROR


def test_main_rejects_bad_host(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(tmp_path), '--output', str(tmp_path), '--host', 'nope'])
    assert exc_info.value.code == cli.EXIT_ERROR


def test_main_preview_run(tmp_path):
    from pypdf import PdfWriter

    source = tmp_path / 'job' / 'source'
    pdfs = tmp_path / 'job' / 'pdf'
    output = tmp_path / 'job' / 'output'
    source.mkdir(parents=True)
    pdfs.mkdir()
    (source / '1234567_001.psd').write_bytes(b'')
    writer = PdfWriter()
    for _ in range(2):
        writer.add_blank_page(width=100, height=100)
    with open(pdfs / '1234567_001.pdf', 'wb') as f:
        writer.write(f)

    cli.main([str(source), '--output', str(output), '--pdf-folder', str(pdfs),
              '--pattern', 'Loft|Ann', '--no-notify'])

    # Nothing logged, nothing written by the preview host
    assert not (tmp_path / 'job' / 'Embed PDF Pages Log.txt').exists()
    assert not output.exists()


def test_list_patterns(capsys):
    cli.main(['--list-patterns'])
    out = capsys.readouterr().out
    assert 'Cacique' in out
    assert 'UNIQLO' in out
