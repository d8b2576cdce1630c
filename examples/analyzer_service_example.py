"""Small example showing `AnalyzerService` usage.

Builds the Gemini request for an in-memory image and prints a summary of the
parts. With GEMINI_API_KEY set (env or .env) it also sends the request.

Run directly:
    python examples/analyzer_service_example.py
"""
import base64
import io

from PIL import Image

from mcp_vision import AnalyzerService, load_config, setup_logging


def sample_image_uri() -> str:
    img = Image.new("RGB", (3000, 1500), color=(200, 30, 30))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def main():
    cfg = load_config()
    setup_logging(cfg.log_level)
    svc = AnalyzerService(cfg)

    instruction = "What color is this image? Answer with one word."
    parts = svc.build_request(sample_image_uri(), instruction)
    for p in parts:
        if "inlineData" in p:
            print("image part:", p["inlineData"]["mimeType"], len(p["inlineData"]["data"]), "base64 chars")
        else:
            print("text part:", p["text"])

    if cfg.api_key:
        print("Answer:", svc.analyze(sample_image_uri(), instruction))


if __name__ == "__main__":
    main()
