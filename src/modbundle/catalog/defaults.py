# src/modbundle/catalog/defaults.py
"""
Built-in MH2p add-on catalog.
"""

from modbundle.catalog.schemas import AddonCatalog, AddonDescriptor

BRANDS = ["Audi", "Lamborghini", "Porsche", "Volkswagen"]

_REPO_URL = "https://github.lawpaul.workers.dev/?user=LawPaul&repo={repo}"

DEFAULT_ADDONS = [
    AddonDescriptor(
        id="Phone_FullScreen",
        name="Phone Full Screen",
        url=_REPO_URL.format(repo="MH2p_CarPlay_FullScreen"),
        description="changes Apple CarPlay/Android Auto to true full screen",
        brands={"Audi", "Porsche"},
        conflicts={"Phone_WindowedFullScreen"},
    ),
    AddonDescriptor(
        id="Phone_WindowedFullScreen",
        name="Phone Windowed Full Screen",
        url=_REPO_URL.format(repo="MH2p_CarPlay_WindowedFullScreen"),
        description="changes Apple CarPlay/Android Auto to windowed full screen (still shows side & top bars)",
        brands={"Audi", "Porsche"},
        conflicts={"Phone_FullScreen"},
    ),
    AddonDescriptor(
        id="AppleCarPlay",
        name="Apple CarPlay",
        url=_REPO_URL.format(repo="MH2p_AppleCarPlay"),
        description="activates wired & wireless Apple CarPlay (*wireless not supported in all countries, see troubleshooting)",
        brands=set(BRANDS),
    ),
    AddonDescriptor(
        id="AndroidAuto",
        name="Android Auto",
        url=_REPO_URL.format(repo="MH2p_AndroidAuto"),
        description="activates wired Android Auto (wireless not supported)",
        brands=set(BRANDS),
    ),
    AddonDescriptor(
        id="NavCompassIgnore",
        name="Navigation Compass Ignore",
        url=_REPO_URL.format(repo="MH2p_NavCompassIgnore"),
        description="shows MH2p maps in instrument cluster when phone navigation is running",
        brands={"Audi"},
    ),
]


def default_catalog() -> AddonCatalog:
    return AddonCatalog(addons=DEFAULT_ADDONS)
