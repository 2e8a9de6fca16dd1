"""CLI tests: run cmap-tool main() in-process against palette files in tmp_path."""

import json
import pkgutil
import sys
from pathlib import Path

import cmap_tool.commands
import pytest
from cmap_tool.__main__ import main
from cmap_tool.core.palette import Palette
from cmap_tool.core.serialize import read_file, to_string, write_file
from cmap_tool.registry import all_commands, get


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated cwd: .git stops the .env walk, CMAP_TOOL_* vars cleared."""
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    for var in ('CMAP_TOOL_LOG_LEVEL', 'CMAP_TOOL_DEFAULT_DEPTH', 'CMAP_TOOL_JSON'):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def grays(workdir: Path) -> Path:
    p = Palette(2)
    for v in (10, 200, 50):
        p.add_color(v, v, v)
    path = workdir / 'grays.cmap'
    write_file(str(path), p)
    return path


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> None:
    monkeypatch.setattr(sys, 'argv', ['cmap-tool', *argv])
    main()


class TestRegistry:
    def test_discovers_all_commands(self):
        names = set(all_commands())
        assert {'show', 'info', 'create', 'add', 'lookup', 'gamma', 'contrast', 'shift', 'hsv', 'rgb', 'rank'} <= names

    def test_registry_matches_package_modules(self):
        modules = {m.name for m in pkgutil.iter_modules(cmap_tool.commands.__path__) if not m.name.startswith('_')}
        assert set(all_commands()) == modules

    def test_unknown_command(self):
        with pytest.raises(KeyError):
            get('nope')


class TestShowAndInfo:
    def test_show_prints_canonical_text(self, grays, monkeypatch, capsys):
        _run(monkeypatch, 'show', str(grays))
        assert capsys.readouterr().out == to_string(read_file(str(grays)))

    def test_show_json(self, grays, monkeypatch, capsys):
        _run(monkeypatch, 'show', str(grays), '--json')
        obj = json.loads(capsys.readouterr().out)
        assert obj['count'] == 3
        assert obj['results']['show']['colors'][1]['hex'] == '#c8c8c8'

    def test_info(self, grays, monkeypatch, capsys):
        _run(monkeypatch, 'info', str(grays), '-j')
        info = json.loads(capsys.readouterr().out)['results']['info']
        assert info['capacity'] == 4
        assert info['free'] == 1
        assert info['has_color'] is False
        assert info['darkest']['index'] == 0
        assert info['lightest']['index'] == 1

    def test_json_from_env(self, grays, monkeypatch, capsys):
        monkeypatch.setenv('CMAP_TOOL_JSON', '1')
        _run(monkeypatch, 'info', str(grays))
        assert json.loads(capsys.readouterr().out)['depth'] == 2

    def test_text_output(self, grays, monkeypatch, capsys):
        _run(monkeypatch, 'info', str(grays))
        out = capsys.readouterr().out
        assert 'depth 2 bpp, 3/4 colors' in out
        assert 'has_color: False' in out


class TestWritingCommands:
    def test_create_uses_default_depth(self, workdir, monkeypatch):
        monkeypatch.setenv('CMAP_TOOL_DEFAULT_DEPTH', '1')
        path = workdir / 'bw.cmap'
        _run(monkeypatch, 'create', str(path), '-c', '#000', '-c', '#ffffff')
        p = read_file(str(path))
        assert p.depth == 1
        assert list(p) == [(0, 0, 0), (255, 255, 255)]

    def test_create_dedup(self, workdir, monkeypatch):
        path = workdir / 'dup.cmap'
        _run(monkeypatch, 'create', str(path), '--depth', '4', '-c', '#123456', '-c', '#123456', '-c', '#000', '--dedup')
        assert read_file(str(path)).count == 2

    def test_create_single_colour_fails(self, workdir, monkeypatch, capsys):
        path = workdir / 'one.cmap'
        with pytest.raises(SystemExit) as info:
            _run(monkeypatch, 'create', str(path), '-c', '#000')
        assert info.value.code == 1
        assert 'InvalidRange' in capsys.readouterr().err
        assert not path.exists()

    def test_create_dedup_below_minimum_fails(self, workdir, monkeypatch, capsys):
        path = workdir / 'dup.cmap'
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'create', str(path), '-c', '#fff', '-c', '#ffffff', '--dedup')
        assert 'InvalidRange' in capsys.readouterr().err
        assert not path.exists()

    def test_add_new_and_white(self, grays, monkeypatch):
        _run(monkeypatch, 'add', str(grays), '-c', '#c8c8c8', '--new', '--white')
        p = read_file(str(grays))
        # #c8c8c8 already present; white takes the last free slot
        assert p.count == 4
        assert p.get_color(3) == (255, 255, 255)

    def test_add_to_full_palette_fails(self, grays, monkeypatch, capsys):
        with pytest.raises(SystemExit) as info:
            _run(monkeypatch, 'add', str(grays), '-c', '#010203', '-c', '#040506')
        assert info.value.code == 1
        assert 'CapacityExhausted' in capsys.readouterr().err
        assert read_file(str(grays)).count == 3

    def test_shift_to_output(self, grays, workdir, monkeypatch):
        out = workdir / 'black.cmap'
        _run(monkeypatch, 'shift', str(grays), '--fraction', '-1.0', '-o', str(out))
        assert list(read_file(str(out))) == [(0, 0, 0)] * 3
        assert read_file(str(grays)).get_color(1) == (200, 200, 200)

    def test_gamma_warning_reported(self, grays, monkeypatch, capsys):
        _run(monkeypatch, 'gamma', str(grays), '--gamma', '0', '-j')
        obj = json.loads(capsys.readouterr().out)
        assert obj['warnings'] == ['gamma must be > 0.0; setting to 1.0']

    def test_gamma_bad_range(self, grays, monkeypatch, capsys):
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'gamma', str(grays), '--min', '200', '--max', '100')
        assert 'InvalidRange' in capsys.readouterr().err

    def test_hsv_then_rgb(self, workdir, monkeypatch):
        path = workdir / 'rgb.cmap'
        _run(monkeypatch, 'create', str(path), '--depth', '2', '-c', '#ff0000', '-c', '#00ffff')
        _run(monkeypatch, 'hsv', str(path))
        assert list(read_file(str(path))) == [(0, 255, 255), (120, 255, 255)]
        _run(monkeypatch, 'rgb', str(path))
        assert list(read_file(str(path))) == [(255, 0, 0), (0, 255, 255)]

    def test_contrast_keeps_count(self, grays, monkeypatch):
        _run(monkeypatch, 'contrast', str(grays), '--factor', '1.0')
        assert read_file(str(grays)).count == 3


class TestQueries:
    def test_rank(self, grays, monkeypatch, capsys):
        _run(monkeypatch, 'rank', str(grays), '--rank', '0.5', '--json')
        rank = json.loads(capsys.readouterr().out)['results']['rank']
        assert rank['index'] == 2
        assert rank['rgb'] == [50, 50, 50]

    def test_lookup_missing_with_nearest(self, grays, monkeypatch, capsys):
        _run(monkeypatch, 'lookup', str(grays), '-c', '#303030', '--nearest', '--json')
        lookup = json.loads(capsys.readouterr().out)['results']['lookup']
        assert lookup['index'] is None
        assert lookup['nearest'] == 2


class TestErrors:
    def test_missing_file(self, workdir, monkeypatch, capsys):
        with pytest.raises(SystemExit) as info:
            _run(monkeypatch, 'info', str(workdir / 'missing.cmap'))
        assert info.value.code == 1
        assert 'palette file not found' in capsys.readouterr().err

    def test_malformed_file(self, workdir, monkeypatch, capsys):
        bad = workdir / 'bad.cmap'
        bad.write_text('\nPixcmap: depth = 8 bpp; 1 colors\n')
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'show', str(bad))
        assert 'MalformedInput' in capsys.readouterr().err

    def test_bad_hex_is_usage_error(self, grays, monkeypatch):
        with pytest.raises(SystemExit) as info:
            _run(monkeypatch, 'lookup', str(grays), '-c', 'nothex')
        assert info.value.code == 2

    def test_help_topic(self, workdir, monkeypatch, capsys):
        _run(monkeypatch, 'help', 'gamma')
        assert 'Gamma-correct every colour' in capsys.readouterr().out

    def test_non_utf8_file(self, workdir, monkeypatch, capsys):
        bad = workdir / 'binary.cmap'
        bad.write_bytes(b'\xff\xfe\x00garbage\n')
        with pytest.raises(SystemExit) as info:
            _run(monkeypatch, 'info', str(bad))
        assert info.value.code == 1
        assert 'MalformedInput' in capsys.readouterr().err
