import pytest

from yt_srt.errors import InvalidURL
from yt_srt.utils import safe_key, sec_ch_headers, video_id, watch_url


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "[rick](https://youtu.be/dQw4w9WgXcQ)",
        "dQw4w9WgXcQ",
    ],
)
def test_video_id(url):
    assert video_id(url) == "dQw4w9WgXcQ"


def test_video_id_rejects_other_links():
    with pytest.raises(InvalidURL):
        video_id("https://www.youtube.com/playlist?list=PLxyz")


def test_watch_url():
    assert watch_url("dQw4w9WgXcQ") == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_video_id_strips_whitespace():
    assert video_id("  dQw4w9WgXcQ\n") == "dQw4w9WgXcQ"


def test_safe_key():
    assert safe_key("subtitles_abc_pt-BR_user_generated") == "subtitles_abc_pt-BR_user_generated"
    assert safe_key("zh/Hans?x") == "zh_Hans_x"
    assert safe_key("///") == "_"


def test_sec_ch_mobile():
    ua = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 Chrome/123.0 Mobile Safari/537.36"
    h = sec_ch_headers(ua)
    assert h["Sec-CH-UA-Mobile"] == "?1"
    assert '"Chromium";v="123"' in h["Sec-CH-UA"]


def test_sec_ch_fallback():
    h = sec_ch_headers("0")
    assert h["Sec-CH-UA"] == '"Not_A Brand";v="99"'
    assert h["Sec-CH-UA-Platform"] == '"Unknown"'


def test_sec_ch_edge_wins_over_chrome():
    ua = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/125.0 Safari/537.36 Edg/125.0"
    h = sec_ch_headers(ua)
    assert '"Microsoft Edge";v="125"' in h["Sec-CH-UA"]
    assert h["Sec-CH-UA-Platform"] == '"Windows"'
    assert h["Sec-CH-UA-Mobile"] == "?0"
