from mcp_vision import Settings, load_config


def test_defaults(clean_env):
    cfg = load_config({})
    assert cfg.provider == "ais"
    assert cfg.model == "models/gemini-flash-lite-latest"
    assert cfg.location == "us-central1"
    assert cfg.max_images == 10
    assert cfg.max_image_bytes == 18 * 1024 * 1024
    assert cfg.max_long_edge == 2048
    assert cfg.timeout == 60
    assert cfg.api_key is None
    assert cfg == Settings()


def test_values_from_mapping():
    env = {
        "GEMINI_PROVIDER": "Vertex",
        "GEMINI_MODEL": "gemini-2.0-flash",
        "GOOGLE_CLOUD_PROJECT": "proj",
        "GEMINI_LOCATION": "europe-west1",
        "GOOGLE_OAUTH_ACCESS_TOKEN": " tok ",
        "VISION_MAX_LONG_EDGE": "0",
        "VISION_MAX_IMAGE_MB": "5",
        "VISION_TIMEOUT": "15",
    }
    cfg = load_config(env)
    assert cfg.provider == "vertex"
    assert cfg.model == "gemini-2.0-flash"
    assert cfg.project == "proj"
    assert cfg.location == "europe-west1"
    assert cfg.access_token == "tok"
    assert cfg.max_long_edge == 0
    assert cfg.max_image_bytes == 5 * 1024 * 1024
    assert cfg.timeout == 15


def test_invalid_int_falls_back_to_default(caplog):
    cfg = load_config({"VISION_MAX_LONG_EDGE": "big"})
    assert cfg.max_long_edge == 2048
    assert "invalid VISION_MAX_LONG_EDGE" in caplog.text


def test_blank_key_is_none():
    assert load_config({"GEMINI_API_KEY": "   "}).api_key is None


def test_debug_flag_sets_log_level():
    assert load_config({"DEBUG": "true"}).log_level == "DEBUG"
    assert load_config({"LOG_LEVEL": "warning"}).log_level == "WARNING"
