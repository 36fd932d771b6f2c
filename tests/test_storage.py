from __future__ import annotations

from expense_tracker.file_operations import safe_filename
from expense_tracker.storage import JsonFileBlobStore, MemoryBlobStore


def test_file_store_round_trip(tmp_path) -> None:
    store = JsonFileBlobStore(tmp_path)
    assert store.read('sx_expenses_v1') is None
    store.write('sx_expenses_v1', '[1, 2]')
    assert store.read('sx_expenses_v1') == '[1, 2]'
    store.write('sx_expenses_v1', '[]')
    assert store.read('sx_expenses_v1') == '[]'
    assert sorted(p.name for p in tmp_path.iterdir()) == ['sx_expenses_v1.json']


def test_file_store_defaults_to_configured_data_dir(_isolate_data_dir) -> None:
    store = JsonFileBlobStore()
    store.write('k', 'v')
    assert (_isolate_data_dir / 'k.json').read_text(encoding='utf-8') == 'v'


def test_file_store_keys_cannot_escape_directory(tmp_path) -> None:
    store = JsonFileBlobStore(tmp_path / 'inner')
    assert store.get_path('../../etc/passwd').parent == tmp_path / 'inner'


def test_memory_store() -> None:
    store = MemoryBlobStore({'a': '1'})
    assert store.read('a') == '1'
    assert store.read('b') is None
    store.write('b', '2')
    assert store.blobs == {'a': '1', 'b': '2'}


def test_safe_filename() -> None:
    assert safe_filename('sx_expenses_v1') == 'sx_expenses_v1'
    assert safe_filename('../my expenses!') == 'my_expenses'
    assert safe_filename('', default='blob') == 'blob'
    assert safe_filename('!!!', default='blob') == 'blob'
