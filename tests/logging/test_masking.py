from s3handler.logging.masking import mask_sensitive_data


def test_payload_fields_are_replaced_by_size():
    event = {"bucket": "b", "key": "k", "payload": "hello", "payload_base64": "aGVsbG8="}

    masked = mask_sensitive_data(event)

    assert masked == {
        "bucket": "b",
        "key": "k",
        "payload": "[5 chars]",
        "payload_base64": "[8 chars]",
    }


def test_secret_fields_are_redacted_case_insensitively():
    masked = mask_sensitive_data({"Authorization": "Bearer abc", "nested": {"Token": "t"}})

    assert masked == {"Authorization": "[REDACTED]", "nested": {"Token": "[REDACTED]"}}


def test_presigned_urls_are_masked():
    url = "https://b.s3.amazonaws.com/k?X-Amz-Signature=deadbeef"

    assert mask_sensitive_data({"link": url}) == {"link": "[PRESIGNED_URL]"}


def test_records_are_walked():
    event = {"Records": [{"s3": {"object": {"key": "a.txt"}}, "body": "secret bytes"}]}

    masked = mask_sensitive_data(event)

    assert masked["Records"][0]["s3"]["object"]["key"] == "a.txt"
    assert masked["Records"][0]["body"] == "[12 chars]"


def test_input_is_not_modified():
    event = {"payload": "hello"}

    mask_sensitive_data(event)

    assert event == {"payload": "hello"}


def test_depth_limit():
    deep = {"a": {"b": {"c": {"d": {"e": {"f": 1}}}}}}

    masked = mask_sensitive_data(deep, max_depth=3)

    assert masked["a"]["b"]["c"] == "[MAX_DEPTH_EXCEEDED]"


def test_bytes_values():
    assert mask_sensitive_data([b"\x00\x01"]) == ["[2 bytes]"]
