#!/usr/bin/env python3
"""Utility script to run the transcript pipeline on local VTT files.

This script:
1. Reads one or more .vtt files
2. Normalizes and joins them into a single transcript
3. Optionally extracts requirements with the real OpenAI API
4. Saves the transcript (and the requirements as TSV) next to the first file
"""
import argparse
import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add parent directory to path to import services
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.result_table import build_result_table
from services.analysis_service import TranscriptAnalysisService
from services.transcript_service import build_transcript


async def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(description="Normalize VTT transcripts")
    parser.add_argument("files", nargs="+", type=Path, help=".vtt files to process")
    parser.add_argument("--extract", action="store_true", help="extract requirements as TSV")
    parser.add_argument("--model", default=None, help="model override")
    args = parser.parse_args()

    missing = [str(path) for path in args.files if not path.exists()]
    if missing:
        print(f"Error: Input file(s) not found: {missing}")
        sys.exit(1)

    documents = [path.read_text(encoding="utf-8-sig") for path in args.files]
    prepared = build_transcript(documents=documents)
    print(f"Transcript length: {prepared.length} characters from {prepared.source_count} file(s)")

    transcript_file = args.files[0].with_suffix(".txt")
    transcript_file.write_text(prepared.transcript, encoding="utf-8")
    print(f"✓ Transcript saved to: {transcript_file}")

    if not args.extract:
        return

    print("Extracting requirements...")
    try:
        service = TranscriptAnalysisService()
        records, usage = await service.extract_requirements(prepared.transcript, args.model)
    except Exception as e:
        print(f"Error extracting requirements: {e}")
        sys.exit(1)

    print(f"Estimated cost: ${usage.total_cost:.4f} ({usage.total_tokens} tokens)")
    table = build_result_table(records)
    if table is None:
        print("No requirements found")
        return

    tsv_file = args.files[0].with_suffix(".tsv")
    tsv_file.write_text(table.project(), encoding="utf-8")
    print(f"✓ {len(table)} requirement(s) saved to: {tsv_file}")


if __name__ == "__main__":
    asyncio.run(main())
