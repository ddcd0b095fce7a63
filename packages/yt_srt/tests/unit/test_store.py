import json

from yt_srt.converter import SubtitleKind, SubtitleResult
from yt_srt.store import LocalKeyValueStore, process_fetched_subtitles, subtitle_key, unique_names

_RESULTS = [
    SubtitleResult("en", SubtitleKind.USER_GENERATED, "1\n00:00:00,000 --> 00:00:01,000\nHi\n\n"),
    SubtitleResult("en", SubtitleKind.AUTO_GENERATED, ""),
]


def test_records_without_store():
    records = process_fetched_subtitles("dQw4w9WgXcQ", _RESULTS)
    assert records == [
        {"srt": _RESULTS[0].srt, "srtUrl": None, "type": "user_generated", "language": "en"},
        {"srt": "", "srtUrl": None, "type": "auto_generated", "language": "en"},
    ]


def test_records_with_local_store(tmp_path):
    store = LocalKeyValueStore(tmp_path / "kvs")
    records = process_fetched_subtitles("dQw4w9WgXcQ", _RESULTS, store=store)

    key = "subtitles_dQw4w9WgXcQ_en_user_generated"
    assert subtitle_key("dQw4w9WgXcQ", _RESULTS[0]) == key
    assert store.get_value(key) == {
        "subtitles": _RESULTS[0].srt,
        "type": "user_generated",
        "language": "en",
    }
    saved = tmp_path / "kvs" / f"{key}.json"
    assert json.loads(saved.read_text(encoding="utf-8"))["language"] == "en"
    assert records[0]["srtUrl"] == saved.resolve().as_uri()
    assert records[1]["srtUrl"].endswith("subtitles_dQw4w9WgXcQ_en_auto_generated.json")


def test_store_accepts_any_object_with_the_protocol():
    class _Memory:
        def __init__(self):
            self.data = {}

        def set_value(self, key, value):
            self.data[key] = value

        def get_public_url(self, key):
            return f"https://kvs.example/{key}"

    mem = _Memory()
    (rec, _) = process_fetched_subtitles("vid", _RESULTS, store=mem)
    assert rec["srtUrl"] == "https://kvs.example/subtitles_vid_en_user_generated"
    assert set(mem.data) == {
        "subtitles_vid_en_user_generated",
        "subtitles_vid_en_auto_generated",
    }


def test_missing_key_reads_none(tmp_path):
    assert LocalKeyValueStore(tmp_path).get_value("nope") is None


def test_duplicate_tracks_get_distinct_keys(tmp_path):
    store = LocalKeyValueStore(tmp_path)
    dupes = [
        SubtitleResult("en", SubtitleKind.USER_GENERATED, "first"),
        SubtitleResult("en", SubtitleKind.USER_GENERATED, "second"),
        SubtitleResult("en", SubtitleKind.USER_GENERATED, "third"),
    ]

    records = process_fetched_subtitles("vid", dupes, store=store)

    assert [r["srtUrl"].rsplit("/", 1)[-1] for r in records] == [
        "subtitles_vid_en_user_generated.json",
        "subtitles_vid_en_user_generated_2.json",
        "subtitles_vid_en_user_generated_3.json",
    ]
    assert store.get_value("subtitles_vid_en_user_generated_2")["subtitles"] == "second"


def test_unique_names_only_suffixes_repeats():
    assert list(unique_names(["a", "b", "a", "a", "b"])) == ["a", "b", "a_2", "a_3", "b_2"]
