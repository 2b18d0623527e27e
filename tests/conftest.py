import sys
import subprocess
from pathlib import Path

# Make the flat project modules importable without installing
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest

import compressor
from app import create_app

SAMPLE_PDF = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


class FakeGhostscript:
    """Stands in for subprocess.run and records every command it gets."""

    def __init__(self):
        self.calls = []
        self.returncode = 0
        self.stderr = ''
        self.write_output = True
        self.raise_error = None
        self.output_bytes = b'%PDF-1.4\n%%EOF\n'

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        if self.raise_error is not None:
            raise self.raise_error

        output = next(arg for arg in cmd if arg.startswith('-sOutputFile=')).split('=', 1)[1]
        if self.write_output:
            Path(output).write_bytes(self.output_bytes)
        stderr = self.stderr.encode() if isinstance(self.stderr, str) else self.stderr
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=b'', stderr=stderr)


@pytest.fixture
def fake_gs(monkeypatch):
    gs = FakeGhostscript()
    monkeypatch.setattr(compressor.subprocess, 'run', gs)
    return gs


@pytest.fixture
def staging_dirs(tmp_path):
    return tmp_path / 'uploads', tmp_path / 'compressed_pdfs'


@pytest.fixture
def app(staging_dirs):
    upload_dir, compressed_dir = staging_dirs
    app = create_app({
        'TESTING': True,
        'UPLOAD_DIR': str(upload_dir),
        'COMPRESSED_DIR': str(compressed_dir),
        'GS_BINARY': 'gs',
        'GS_TIMEOUT': 30,
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_pdf():
    return SAMPLE_PDF
