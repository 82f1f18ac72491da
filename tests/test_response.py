from dataclasses import dataclass

from krillin.response import Response


@dataclass
class _Payload:
    task_id: str


class _WithToDict:
    def to_dict(self):
        return {"file_path": ["local:./uploads/a.mp4"]}


def test_plain_envelope():
    assert Response(error=-1, msg="参数错误").to_dict() == {
        "error": -1,
        "msg": "参数错误",
        "data": None,
    }


def test_dataclass_payload_is_converted():
    result = Response(0, "成功", _Payload(task_id="abc")).to_dict()
    assert result["data"] == {"task_id": "abc"}


def test_payload_with_to_dict_is_used():
    result = Response(0, "文件上传成功", _WithToDict()).to_dict()
    assert result["data"] == {"file_path": ["local:./uploads/a.mp4"]}


def test_dict_payload_passes_through():
    payload = {"file_path": ["x"]}
    assert Response(0, "ok", payload).to_dict()["data"] is payload