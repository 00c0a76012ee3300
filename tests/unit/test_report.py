import json

from tests.helpers.spamlet_imports import SitemapReport


def test_report_to_json_sorts_pages():
    report = SitemapReport(seed_url="http://app/")
    report.add_page("http://app/b", "B")
    report.add_page("http://app/a", None)
    report.add_failure("http://app/missing", 404)

    data = json.loads(report.to_json())

    assert data["seed_url"] == "http://app/"
    assert data["pages"] == [
        {"url": "http://app/a", "title": None},
        {"url": "http://app/b", "title": "B"},
    ]
    assert data["failures"] == [{"url": "http://app/missing", "status": 404}]


def test_report_save_and_load(tmp_path):
    report = SitemapReport(
        seed_url="http://app/",
        pages={"http://app/": "Home", "http://app/about": "About"},
        failures=[{"url": "http://app/gone", "status": 410}],
    )

    path = tmp_path / "sitemap.json"
    report.save(path)

    assert SitemapReport.load(path) == report
