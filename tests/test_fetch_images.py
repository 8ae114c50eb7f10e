import json

import pytest

import fetch_images
from acquisition_progress import AcquisitionProgress, save_progress
from fakes import make_image
from fetch_images import ImageFetcher, dedup_images, parse_target
from furniture_categories import CategorySpec
from image_providers import PexelsProvider
from seed_common import ConfigError

SOFA = CategorySpec("sofa", ("sofa",), 30)
BED = CategorySpec("bed", ("bed",), 30)


@pytest.fixture
def make_fetcher(tmp_path, fake_apis, sleeps):
    def build(providers, categories):
        return ImageFetcher(
            providers,
            categories=categories,
            progress_file=tmp_path / "progress.json",
            images_dir=tmp_path,
            sleep=sleeps,
            transport=fake_apis.transport,
        )
    return build


def read_catalog(tmp_path, name="image_catalog.json"):
    return json.loads((tmp_path / name).read_text())


def test_fresh_acquisition_single_provider(tmp_path, fake_apis, sleeps, make_fetcher, unsplash):
    fake_apis.unsplash[("sofa", 1)] = [f"u{i}" for i in range(30)]

    summary = make_fetcher([unsplash], [SOFA]).run(30)

    catalog = read_catalog(tmp_path)
    assert len(catalog["images"]) <= 30
    assert summary["total"] == len(catalog["images"]) == 30
    assert {img["category"] for img in catalog["images"]} == {"sofa"}
    assert catalog["meta"]["perSourceCounts"] == {"unsplash": 30}
    assert catalog["meta"]["perCategoryCounts"] == {"sofa": 30}
    assert catalog["meta"]["licenseNotice"]
    assert "generatedAt" in catalog["meta"]
    assert not (tmp_path / "progress.json").exists()
    assert (tmp_path / "unsplash_urls.json").exists()
    assert not (tmp_path / "pexels_urls.json").exists()
    assert sleeps.calls == [fetch_images.RATE_LIMIT_DELAY]


def test_page_is_trimmed_to_global_target(tmp_path, fake_apis, make_fetcher, unsplash):
    fake_apis.unsplash[("sofa", 1)] = [f"u{i}" for i in range(30)]

    summary = make_fetcher([unsplash], [SOFA]).run(12)

    assert summary["total"] == 12
    assert len(read_catalog(tmp_path)["images"]) == 12


def test_falls_back_to_secondary_provider_per_page(tmp_path, fake_apis, make_fetcher, unsplash, pexels):
    category = CategorySpec("desk", ("desk",), 20)
    fake_apis.pexels[("desk", 1)] = [101, 102, 103, 104, 105]
    fake_apis.unsplash[("desk", 2)] = [f"u{i}" for i in range(15)]
    fake_apis.pexels[("desk", 2)] = [999]

    summary = make_fetcher([unsplash, pexels], [category]).run(100)

    assert summary["per_source"] == {"pexels": 5, "unsplash": 15}
    # Secondary only asked for the page the primary came back empty on
    assert fake_apis.calls_to("api.pexels.com") == [("api.pexels.com", "desk", 1)]
    pexels_catalog = read_catalog(tmp_path, "pexels_urls.json")
    assert [img["id"] for img in pexels_catalog["images"]] == ["101", "102", "103", "104", "105"]
    assert {img["category"] for img in pexels_catalog["images"]} == {"desk"}


def test_failed_primary_falls_back(tmp_path, fake_apis, make_fetcher, unsplash, pexels):
    fake_apis.unsplash[("sofa", 1)] = 503
    fake_apis.pexels[("sofa", 1)] = list(range(30))

    summary = make_fetcher([unsplash, pexels], [SOFA]).run(30)

    assert summary["per_source"] == {"pexels": 30}


def test_resume_skips_completed_categories(tmp_path, fake_apis, make_fetcher, unsplash):
    checkpoint = AcquisitionProgress().with_page(
        [make_image(f"s{i}", category="sofa") for i in range(15)]
    ).with_category_done("sofa")
    save_progress(tmp_path / "progress.json", checkpoint)
    fake_apis.unsplash[("bed", 1)] = [f"b{i}" for i in range(30)]

    summary = make_fetcher([unsplash], [SOFA, BED]).run(100)

    assert all(query != "sofa" for _, query, _ in fake_apis.calls)
    assert summary["total"] >= 15
    assert summary["per_category"] == {"sofa": 15, "bed": 30}
    assert summary["fetched"] == 30
    assert not (tmp_path / "progress.json").exists()


def test_unknown_last_category_skips_nothing(tmp_path, fake_apis, make_fetcher, unsplash):
    save_progress(tmp_path / "progress.json", AcquisitionProgress().with_category_done("hammock"))
    fake_apis.unsplash[("sofa", 1)] = ["a"]

    make_fetcher([unsplash], [SOFA]).run(1)

    assert ("api.unsplash.com", "sofa", 1) in fake_apis.calls


def test_checkpoint_written_after_each_page(tmp_path, fake_apis, make_fetcher, unsplash):
    snapshots = []
    fake_apis.unsplash[("sofa", 1)] = ["a", "b"]
    fake_apis.unsplash[("sofa", 2)] = ["c"]
    fetcher = make_fetcher([unsplash], [CategorySpec("sofa", ("sofa",), 3)])

    def record_sleep(seconds):
        snapshots.append(json.loads((tmp_path / "progress.json").read_text())["completedCount"])

    fetcher.sleep = record_sleep
    fetcher.run(50)

    assert snapshots == [2, 3]


def test_query_stops_after_max_pages(tmp_path, fake_apis, make_fetcher, unsplash):
    for page in range(1, 15):
        fake_apis.unsplash[("chair", page)] = [f"c{page}"]

    summary = make_fetcher([unsplash], [CategorySpec("chair", ("chair",), 100)]).run(1000)

    pages = [page for _, _, page in fake_apis.calls]
    assert pages == list(range(1, fetch_images.MAX_PAGES + 1))
    assert summary["total"] == fetch_images.MAX_PAGES


def test_category_target_skips_remaining_queries(tmp_path, fake_apis, make_fetcher, unsplash):
    category = CategorySpec("sofa", ("sofa", "couch"), 30)
    fake_apis.unsplash[("sofa", 1)] = [f"s{i}" for i in range(30)]

    make_fetcher([unsplash], [category]).run(500)

    assert all(query == "sofa" for _, query, _ in fake_apis.calls)


def test_target_reached_stops_before_next_category(tmp_path, fake_apis, make_fetcher, unsplash):
    fake_apis.unsplash[("sofa", 1)] = [f"s{i}" for i in range(30)]
    fake_apis.unsplash[("bed", 1)] = [f"b{i}" for i in range(30)]

    summary = make_fetcher([unsplash], [SOFA, BED]).run(30)

    assert summary["per_category"] == {"sofa": 30}


def test_finalize_dedups_repeats(tmp_path, fake_apis, make_fetcher, unsplash):
    category = CategorySpec("sofa", ("sofa", "couch"), 60)
    fake_apis.unsplash[("sofa", 1)] = [f"x{i}" for i in range(30)]
    fake_apis.unsplash[("couch", 1)] = [f"x{i}" for i in range(20, 50)]

    summary = make_fetcher([unsplash], [category]).run(500)

    assert summary["total"] == 50
    assert summary["fetched"] == 60


def test_dedup_keeps_same_id_from_different_sources():
    images = [make_image(1, source="unsplash"), make_image(1, source="pexels")]
    assert len(dedup_images(images)) == 2


def test_dedup_last_write_wins_in_first_position():
    first = make_image(1, tags=("old",))
    later = make_image(1, tags=("new",))
    unique = dedup_images([first, make_image(2), later])

    assert [img.id for img in unique] == ["1", "2"]
    assert unique[0].tags == ["new"]


def test_dedup_is_idempotent():
    images = [make_image(i % 4, source=("unsplash", "pexels")[i % 2]) for i in range(12)]
    once = dedup_images(images)
    assert dedup_images(once) == once


def test_fetcher_requires_providers():
    with pytest.raises(ConfigError):
        ImageFetcher([])


@pytest.mark.parametrize("argv, expected", [
    ([], 800),
    (["300"], 300),
    (["abc"], 800),
    (["0"], 800),
])
def test_parse_target(argv, expected):
    assert parse_target(argv) == expected


def test_main_without_credentials_exits_1(monkeypatch):
    monkeypatch.delenv("UNSPLASH_ACCESS_KEY", raising=False)
    monkeypatch.delenv("PEXELS_API_KEY", raising=False)
    assert fetch_images.main([]) == 1


def test_main_runs_configured_fetcher(monkeypatch):
    seen = {}

    class StubFetcher:
        def __init__(self, providers):
            seen["providers"] = [type(p) for p in providers]

        def run(self, target):
            seen["target"] = target
            return {}

    monkeypatch.setenv("PEXELS_API_KEY", "p")
    monkeypatch.delenv("UNSPLASH_ACCESS_KEY", raising=False)
    monkeypatch.setattr(fetch_images, "ImageFetcher", StubFetcher)

    assert fetch_images.main(["40"]) == 0
    assert seen == {"providers": [PexelsProvider], "target": 40}
