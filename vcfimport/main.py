import logging

from fastapi import FastAPI, File, HTTPException, UploadFile

from . import config
from .types import PreviewPayload, SkippedCardPayload
from .vcards import VCFParserError, parse_vcf_report, validate_content

log = logging.getLogger(__name__)
logging.getLogger("vcfimport").setLevel(config.LOG_LEVEL)

app = FastAPI(title="vcfimport")


def _accepts_upload(filename: str, content_type: str) -> bool:
    name = filename.lower()
    return (
        name.endswith(config.ALLOWED_EXTENSIONS)
        or "application/octet-stream" in content_type
        or "contact" in name
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/contacts/import/preview")
async def import_preview(vcfFile: UploadFile | None = File(None)):
    if vcfFile is None:
        raise HTTPException(status_code=400, detail="No file provided")

    if not _accepts_upload(vcfFile.filename or "", vcfFile.content_type or ""):
        raise HTTPException(
            status_code=400, detail="Invalid file type. Please upload a .vcf file"
        )

    limit = config.MAX_UPLOAD_BYTES
    # One byte past the limit is enough to tell an oversize upload apart.
    data = await vcfFile.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {limit} byte limit",
        )

    content = data.decode(errors="ignore")
    if not content.strip():
        raise HTTPException(status_code=400, detail="File is empty")
    if not validate_content(content):
        raise HTTPException(status_code=400, detail="Invalid VCF file format")

    try:
        report = parse_vcf_report(content)
    except VCFParserError as exc:
        log.info("Rejected upload %s: %s", vcfFile.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    contacts = [c.to_dict() for c in report.contacts]
    skipped: list[SkippedCardPayload] = [
        {"index": r.index, "reason": r.reason or ""} for r in report.skipped
    ]
    payload: PreviewPayload = {
        "contacts": contacts,
        "count": len(contacts),
        "skipped": skipped,
        "message": f"Parsed {len(contacts)} contacts. {len(skipped)} cards were skipped.",
    }
    return payload
