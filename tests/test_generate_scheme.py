import json
import sys

import pytest
from PIL import Image

import generate_scheme
from scheme import ROLE_NAMES


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['generate-scheme', *args])
    generate_scheme.main()


def test_json_output_has_both_modes(monkeypatch, capsys):
    run_cli(monkeypatch, '--seed', '#6750A4', '--json')
    payload = json.loads(capsys.readouterr().out)
    assert payload['seed'] == '#6750a4'
    assert set(payload['schemes']) == {'light', 'dark'}
    for roles in payload['schemes'].values():
        assert list(roles) == list(ROLE_NAMES)
        assert all(v.startswith('#') and len(v) == 7 for v in roles.values())


def test_single_mode_table(monkeypatch, capsys):
    run_cli(monkeypatch, '--seed', '0000ff', '--mode', 'dark')
    out = capsys.readouterr().out
    assert 'dark' in out
    assert 'surface_container_highest' in out
    assert 'on_primary / primary contrast' in out


def test_invalid_seed_exits_1(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, '--seed', 'banana')
    assert exc.value.code == 1
    assert 'Invalid hex color' in capsys.readouterr().err


def test_missing_image_exits_2(monkeypatch, tmp_path):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, '--image', str(tmp_path / 'missing.png'))
    assert exc.value.code == 2


def test_seed_and_image_are_exclusive(monkeypatch, tmp_path):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, '--seed', '#fff', '--image', str(tmp_path / 'x.png'))
    assert exc.value.code == 2


def test_image_seed_and_html_report(monkeypatch, tmp_path, capsys):
    image = tmp_path / 'green.png'
    Image.new('RGB', (20, 20), (20, 180, 40)).save(image)
    report = tmp_path / 'report.html'

    run_cli(monkeypatch, '--image', str(image), '--output', str(report))

    html = report.read_text()
    assert html.startswith('<!DOCTYPE html>')
    assert 'primary_container' in html
    assert 'Light' in html and 'Dark' in html
    assert f'Wrote: {report}' in capsys.readouterr().out
