import json

import pytest

import spamlet.cli as cli_module  # type: ignore[import]
import spamlet.core.config as config_module  # type: ignore[import]

from tests.helpers.fakes import FakeSite, PageSpec, session_factory
from tests.helpers.spamlet_imports import Spamlet


def test_extract_links_reads_anchor_hrefs():
    html = '<a href="/a">A</a><a>no href</a><a href="https://x.test/">X</a>'

    assert cli_module.extract_links(html) == ["/a", "https://x.test/"]


def test_run_cli_writes_sitemap(monkeypatch, tmp_path):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    monkeypatch.delenv("SPAMLET_DEPTH", raising=False)
    site = FakeSite(
        {
            "http://localhost:5173/": PageSpec(links=["/about", "/broken", "?q=1"], title="Home"),
            "http://localhost:5173/about": PageSpec(links=["/"], title="About"),
        }
    )
    factory = session_factory(site)

    original_init = Spamlet.__init__

    def patched_init(self, *args, **kwargs):
        kwargs["session_factory"] = factory
        original_init(self, *args, **kwargs)

    monkeypatch.setattr(cli_module.Spamlet, "__init__", patched_init)
    output = tmp_path / "sitemap.json"

    report = cli_module.run_cli(["http://localhost:5173", "--deny", r"\?", "--output", str(output)])

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["pages"] == [
        {"url": "http://localhost:5173/", "title": "Home"},
        {"url": "http://localhost:5173/about", "title": "About"},
    ]
    assert data["failures"] == [{"url": "http://localhost:5173/broken", "status": 404}]
    assert report.seed_url == "http://localhost:5173"
    assert "http://localhost:5173/?q=1" not in site.navigations


@pytest.mark.parametrize("url", ["localhost:5173", "localhost:5173/about"])
def test_seed_without_host_needs_explicit_allow(url, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli_module.parse_arguments([url])

    assert excinfo.value.code == 2
    assert "--allow" in capsys.readouterr().err


def test_explicit_allow_accepts_seed_without_scheme():
    args = cli_module.parse_arguments(["localhost:5173", "--allow", "localhost:5173"])

    assert args.allow == "localhost:5173"
