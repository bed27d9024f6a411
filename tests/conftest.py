"""
Shared fixtures: in-memory ZIP archives and a fetcher that never touches the network.
"""

import io
import zipfile

import pytest

from modbundle.catalog import AddonCatalog, AddonDescriptor
from modbundle.core.exceptions import FetchError

KIT_URL = "https://example.test/kit.zip"


def build_zip(members):
    """
    Create ZIP bytes from (name, content) pairs, in order.
    A content of None adds a directory entry.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as zipf:
        for name, content in members:
            if content is None:
                zipf.writestr(zipfile.ZipInfo(name), b"")
            else:
                if isinstance(content, str):
                    content = content.encode("utf-8")
                zipf.writestr(name, content)
    return buffer.getvalue()


def zip_contents(data):
    """Map member name -> bytes for every file in a ZIP blob."""
    with zipfile.ZipFile(io.BytesIO(data)) as zipf:
        return {info.filename: zipf.read(info) for info in zipf.infolist()}


class FakeFetcher:
    """Serves canned bytes per URL; an int value is treated as an HTTP status."""

    def __init__(self, responses):
        self.responses = dict(responses)
        self.calls = []

    def fetch(self, url, source=None):
        self.calls.append(url)
        if url not in self.responses:
            raise FetchError(url, status_code=404, reason="Not Found", source=source)
        value = self.responses[url]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, int):
            raise FetchError(url, status_code=value, reason="Error", source=source)
        return value


@pytest.fixture
def kit_zip():
    return build_zip([
        ("kit-main/", None),
        ("kit-main/readme.txt", "kit readme"),
        ("kit-main/cfg/", None),
        ("kit-main/cfg/base.ini", "[base]\nvalue=1\n"),
    ])


@pytest.fixture
def catalog():
    return AddonCatalog(addons=[
        AddonDescriptor(id="AppleCarPlay", name="Apple CarPlay", url="https://example.test/carplay.zip",
                        brands={"Audi", "Porsche", "Volkswagen"}),
        AddonDescriptor(id="AndroidAuto", name="Android Auto", url="https://example.test/aa.zip"),
        AddonDescriptor(id="Phone_FullScreen", url="https://example.test/full.zip",
                        brands={"Audi"}, conflicts={"Phone_WindowedFullScreen"}),
        AddonDescriptor(id="Phone_WindowedFullScreen", url="https://example.test/windowed.zip",
                        brands={"Audi"}, conflicts={"Phone_FullScreen"}),
    ])


@pytest.fixture
def addon_zips():
    return {
        "https://example.test/carplay.zip": build_zip([
            ("repo-main/", None),
            ("repo-main/Mods/", None),
            ("repo-main/Mods/cfg/carplay.ini", "carplay=on"),
        ]),
        "https://example.test/aa.zip": build_zip([
            ("MH2p_AndroidAuto-main/scripts/aa.sh", "#!/bin/sh\necho aa\n"),
            ("MH2p_AndroidAuto-main/README.md", "Android Auto"),
        ]),
        "https://example.test/full.zip": build_zip([
            ("full-main/cfg/screen.ini", "mode=full"),
        ]),
        "https://example.test/windowed.zip": build_zip([
            ("windowed-main/cfg/screen.ini", "mode=windowed"),
        ]),
    }


@pytest.fixture
def fetcher(kit_zip, addon_zips):
    return FakeFetcher({KIT_URL: kit_zip, **addon_zips})


@pytest.fixture
def kit_url():
    return KIT_URL


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def unzip():
    return zip_contents


@pytest.fixture
def fake_fetcher_cls():
    return FakeFetcher
