from typing import List

from fastapi import FastAPI # type: ignore
from pydantic import BaseModel, Field # type: ignore

from pipeline import extract_unit, extract_units
from registry import parse_source
from settings import configure_logging
from summarize import class_context, faq_context, getting_started_context, project_overview_context

configure_logging()

app = FastAPI(title="parse-core")


class Req(BaseModel):
    code: str
    filename: str | None = None


class BatchReq(BaseModel):
    units: List[Req]
    max_workers: int | None = Field(default=None, ge=1)
    preserve_order: bool | None = None


class SummaryReq(BatchReq):
    repository_name: str


@app.post("/extract")
def extract(req: Req):
    return extract_unit(parse_source(req.code, req.filename)).to_dict()


@app.post("/extract/batch")
def extract_batch(req: BatchReq):
    sources = [parse_source(u.code, u.filename) for u in req.units]
    report = extract_units(sources, max_workers=req.max_workers, preserve_order=req.preserve_order)
    return report.to_dict()


@app.post("/summaries")
def summaries(req: SummaryReq):
    sources = [parse_source(u.code, u.filename) for u in req.units]
    report = extract_units(sources, max_workers=req.max_workers, preserve_order=req.preserve_order)
    models = report.models

    return {
        "project_overview": project_overview_context(models, req.repository_name),
        "getting_started": getting_started_context(models, req.repository_name),
        "faq": faq_context(models, req.repository_name),
        "classes": [class_context(m) for m in models],
        "skipped": [{"unit": s.unit, "reason": s.reason, "detail": s.detail} for s in report.skips],
    }
