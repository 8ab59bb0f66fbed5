from pathlib import Path

from icon_extractor.services.path_resolver import ResolvedPath, find_executable, list_executables, resolve_path


def fake_filesystem(directories, files):
    """Build exists/is_dir/lister callables over an in-memory layout."""
    directories = {Path(d): [Path(f) for f in listing] for d, listing in directories.items()}
    files = {Path(f) for f in files}

    return dict(
        exists=lambda p: p in directories or p in files,
        is_dir=lambda p: p in directories,
        lister=lambda p: directories[p],
    )


def test_directory_name_selects_matching_executable():
    fs = fake_filesystem({'/games/foo': ['/games/foo/bar.exe', '/games/foo/foo.exe']}, [])
    result = resolve_path('/games/foo', **fs)
    assert result == ResolvedPath.resolved(Path('/games/foo'), Path('/games/foo/foo.exe'))


def test_match_is_a_case_insensitive_substring():
    fs = fake_filesystem({'/apps/Editor': ['/apps/Editor/setup.exe', '/apps/Editor/MYEDITOR64.EXE']}, [])
    assert resolve_path('/apps/Editor', **fs).executable == Path('/apps/Editor/MYEDITOR64.EXE')


def test_falls_back_to_first_listed_executable():
    fs = fake_filesystem({'/apps/tool': ['/apps/tool/b.exe', '/apps/tool/a.exe']}, [])
    assert resolve_path('/apps/tool', **fs).executable == Path('/apps/tool/b.exe')


def test_directory_without_executables_is_no_match():
    fs = fake_filesystem({'/empty': []}, [])
    result = resolve_path('/empty', **fs)
    assert result.kind == ResolvedPath.NO_MATCH
    assert not result.ok


def test_missing_path_is_not_exist():
    fs = fake_filesystem({}, [])
    result = resolve_path('/nowhere/app.exe', **fs)
    assert result == ResolvedPath.not_exist(Path('/nowhere/app.exe'))


def test_file_path_is_used_directly():
    fs = fake_filesystem({}, ['/bin/tool.exe'])
    result = resolve_path('/bin/tool.exe', **fs)
    assert result.ok
    assert result.executable == Path('/bin/tool.exe')


def test_find_executable_with_no_candidates():
    assert find_executable(Path('/x'), []) is None


def test_real_directory(tmp_path):
    app = tmp_path / 'foo'
    app.mkdir()
    (app / 'bar.exe').write_bytes(b'MZ')
    (app / 'foo.exe').write_bytes(b'MZ')
    (app / 'notes.txt').write_text('x')
    (app / 'plugins.exe').mkdir()

    assert sorted(p.name for p in list_executables(app)) == ['bar.exe', 'foo.exe']
    assert resolve_path(app).executable == app / 'foo.exe'


def test_real_directory_without_executables(tmp_path):
    (tmp_path / 'data.bin').write_bytes(b'\x00')
    assert resolve_path(tmp_path).kind == ResolvedPath.NO_MATCH
    assert resolve_path(tmp_path / 'gone').kind == ResolvedPath.NOT_EXIST
