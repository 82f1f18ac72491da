import pytest

from krillin.dto import (
    GetVideoSubtitleTaskResData,
    StartVideoSubtitleTaskReq,
    SubtitleInfo,
    VideoInfo,
)


def test_empty_request_has_zero_values():
    req = StartVideoSubtitleTaskReq.from_dict({})
    assert req == StartVideoSubtitleTaskReq()
    assert req.replace == []


def test_origin_lang_key_maps_to_origin_language():
    req = StartVideoSubtitleTaskReq.from_dict({"origin_lang": "en", "target_lang": "zh_cn"})
    assert req.origin_language == "en"
    assert req.to_dict()["origin_lang"] == "en"
    assert req.to_dict()["target_lang"] == "zh_cn"


def test_request_round_trip():
    req = StartVideoSubtitleTaskReq(
        app_id=3,
        url="local:./uploads/clip.mp4",
        origin_language="en",
        target_lang="zh_cn",
        bilingual=1,
        translation_subtitle_pos=2,
        modal_filter=1,
        tts=1,
        tts_voice_code=2,
        replace=["foo|bar"],
        embed_subtitle_video_type="vertical",
        vertical_major_title="Main",
        vertical_minor_title="Minor",
        origin_language_word_one_line=-4,
    )
    assert StartVideoSubtitleTaskReq.from_dict(req.to_dict()) == req


def test_null_values_become_defaults():
    req = StartVideoSubtitleTaskReq.from_dict({"url": None, "replace": None, "tts": None})
    assert req.url == ""
    assert req.replace == []
    assert req.tts == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"bilingual": 256},
        {"tts": -1},
        {"app_id": 1 << 32},
        {"url": 5},
        {"replace": "a"},
        {"modal_filter": 1.5},
        {"bilingual": True},
    ],
)
def test_invalid_request_raises(payload):
    with pytest.raises(ValueError):
        StartVideoSubtitleTaskReq.from_dict(payload)


def test_request_must_be_object():
    with pytest.raises(ValueError):
        StartVideoSubtitleTaskReq.from_dict(["not", "an", "object"])


def test_status_data_round_trip():
    data = GetVideoSubtitleTaskResData(
        task_id="t1",
        process_percent=100,
        video_info=VideoInfo(title="Title", language="en"),
        subtitle_info=[SubtitleInfo(name="a.srt", download_url="/api/file/a.srt")],
        target_language="zh_cn",
        speech_download_url="/api/file/speech.wav",
    )
    assert GetVideoSubtitleTaskResData.from_dict(data.to_dict()) == data


def test_status_data_without_video_info():
    data = GetVideoSubtitleTaskResData.from_dict({"task_id": "t2", "video_info": None})
    assert data.video_info is None
    assert data.to_dict()["video_info"] is None
    assert data.subtitle_info == []


def test_status_percent_out_of_range():
    with pytest.raises(ValueError):
        GetVideoSubtitleTaskResData.from_dict({"process_percent": 300})


def test_status_subtitle_info_must_be_list():
    with pytest.raises(ValueError):
        GetVideoSubtitleTaskResData.from_dict({"subtitle_info": {"name": "x"}})