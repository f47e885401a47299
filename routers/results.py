"""
Results router for exporting extracted records.

POST /api/results/export turns records plus a row selection into
tab-separated text for pasting into a spreadsheet. An empty selection
exports every row; an empty record collection returns 204 with no table.
"""

import logging
from fastapi import APIRouter, Response

from models.analysis_models import ExportRequest
from models.result_table import build_result_table
from utils.record_utils import coerce_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/results", tags=["results"])

TSV_MEDIA_TYPE = "text/tab-separated-values"


@router.post("/export")
async def export_results(body: ExportRequest):
    """
    Export selected records as TSV.

    Args:
        body: ExportRequest with records and optional selection indices

    Returns:
        TSV text response, or 204 No Content when there are no records
    """
    table = build_result_table([coerce_record(record) for record in body.records])
    if table is None:
        logger.info("Export requested with no records")
        return Response(status_code=204)

    tsv = table.project(body.selection)
    logger.info(
        f"Results exported: records={len(table)}, selected={len(set(body.selection))}, "
        f"columns={len(table.headers())}"
    )
    return Response(content=tsv, media_type=TSV_MEDIA_TYPE)
