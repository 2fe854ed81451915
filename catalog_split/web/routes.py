## routes.py
from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify, request, send_file

from catalog_split.config.ini_config import AppSettings
from catalog_split.domain.errors import ArrayNotFoundError, MalformedInputError
from catalog_split.domain.models import SplitResult
from catalog_split.repositories.module_repository import ModuleRepository
from catalog_split.services.block_extractor import extract_blocks
from catalog_split.services.module_renderer import extract_slug
from catalog_split.services.split_service import SplitService


def _result_payload(result: SplitResult) -> dict:
    return {
        "status": result.status,
        "source": result.source,
        "output_dir": result.output_dir,
        "generated_at": result.generated_at,
        "duration_seconds": result.duration_seconds,
        "block_count": result.block_count,
        "written": [
            {"slug": w.slug, "identifier": w.identifier, "file": w.path.name}
            for w in result.written
        ],
        "failures": [
            {"position": f.position, "reason": f.reason, "preview": f.preview}
            for f in result.failures
        ],
    }


def _malformed(e: MalformedInputError):
    return jsonify(error=str(e), offset=e.offset, quote_offset=e.quote_offset), 422


def create_blueprint(split_service: SplitService, module_repo: ModuleRepository, settings: AppSettings) -> Blueprint:
    bp = Blueprint("web", __name__)

    def read_json_object() -> dict:
        payload = request.get_json(silent=True)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            abort(400, description="JSON object expected.")
        return payload

    def read_text_field(payload: dict):
        text = payload.get("text")
        if text is not None and not isinstance(text, str):
            abort(400, description="'text' must be a string.")
        if text is not None and settings.max_source_chars and len(text) > settings.max_source_chars:
            abort(413, description=f"'text' exceeds {settings.max_source_chars} chars.")
        return text

    @bp.get("/health")
    def health():
        return jsonify(status="ok")

    @bp.post("/extract")
    def extract():
        payload = read_json_object()
        text = read_text_field(payload)
        if text is None:
            abort(400, description="'text' is required.")

        strict = payload.get("strict", settings.strict)
        if not isinstance(strict, bool):
            abort(400, description="'strict' must be a boolean.")

        try:
            blocks = extract_blocks(text, strict=strict)
        except MalformedInputError as e:
            current_app.logger.info("Extract rejected: %s", e)
            return _malformed(e)

        return jsonify(
            count=len(blocks),
            blocks=[{"slug": extract_slug(b), "text": b} for b in blocks],
        )

    @bp.post("/split")
    def split():
        payload = read_json_object()
        text = read_text_field(payload)

        try:
            if text is None:
                result = split_service.split_file(settings.source_file)
            else:
                result = split_service.split_text(text, source_label="<request>")
        except MalformedInputError as e:
            current_app.logger.warning("Split rejected: %s", e)
            return _malformed(e)
        except (ArrayNotFoundError, FileNotFoundError) as e:
            current_app.logger.warning("Split failed: %s", e)
            return jsonify(error=str(e)), 404
        except ValueError as e:
            return jsonify(error=str(e)), 413

        code = 500 if result.status == "failed" else 200
        current_app.logger.info(
            "Split %s status=%s written=%d failed=%d",
            result.source, result.status, len(result.written), len(result.failures),
        )
        return jsonify(_result_payload(result)), code

    @bp.get("/modules")
    def list_modules():
        return jsonify(modules=[p.name for p in module_repo.list_modules()])

    @bp.get("/modules/<filename>")
    def download(filename: str):
        full = module_repo.resolve(filename)
        if full is None:
            abort(404)
        return send_file(full, as_attachment=True)

    return bp
