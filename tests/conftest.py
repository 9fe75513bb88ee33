"""
Shared fixtures for Layer Aligner tests.

Provides layer stores in common states, reference point sets and small image
files written with Pillow.
"""
import os
import sys

import pytest

# Ensure src is on the path when the package is not installed
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

# Qt widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# ── Sample reference points ─────────────────────────────────────────────

SAMPLE_REFS = {
    'body_top_y': 0.2,
    'face_bottom_y': 0.6,
    'body_bottom_y': 0.9,
    'eye_left_x': 0.3,
    'eye_left_y': 0.4,
    'eye_right_x': 0.7,
    'eye_right_y': 0.4,
}


@pytest.fixture
def sample_refs():
    """Reference points of a second portrait, different from the defaults"""
    from layer_aligner.models.layer import ReferencePoints
    return ReferencePoints(**SAMPLE_REFS)


@pytest.fixture
def store():
    """Empty layer store with a fresh history"""
    from layer_aligner.models.layer_store import LayerStore
    return LayerStore()


@pytest.fixture
def two_layer_store(store):
    """Store with two square layers: reference at (100, 100) 400x400, second at 0,0 200x200"""
    ids = store.add_layers(['reference.png', 'second.png'])
    store.apply_decoded_size(ids[0], 800, 800)
    store.apply_decoded_size(ids[1], 500, 500)
    store.update_geometry(ids[0], _geometry(100, 100, 400, 400))
    store.update_geometry(ids[1], _geometry(0, 0, 200, 200))
    store.history.clear()
    return store


@pytest.fixture
def bounds():
    from layer_aligner.models.transform import CanvasBounds
    return CanvasBounds(1000, 800)


@pytest.fixture
def image_files(tmp_path):
    """Three PNGs (400x600, 600x400, 500x500) and one unsupported text file"""
    from PIL import Image
    paths = []
    for name, size in (('tall.png', (400, 600)), ('wide.png', (600, 400)), ('square.png', (500, 500))):
        path = tmp_path / name
        Image.new('RGB', size, (200, 120, 80)).save(path)
        paths.append(str(path))
    notes = tmp_path / 'notes.txt'
    notes.write_text('not an image')
    return paths, str(notes)


def _geometry(x, y, width, height):
    from layer_aligner.models.transform import Geometry
    return Geometry(x, y, width, height)


@pytest.fixture
def broken_image(tmp_path):
    """A file with an accepted extension that is not an image"""
    path = tmp_path / 'broken.png'
    path.write_bytes(b'this is not a png')
    return str(path)
