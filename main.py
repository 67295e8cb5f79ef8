import os
import argparse
import logging

from dotenv import load_dotenv
from tqdm import tqdm

from overlap_checker.core.config import DetectorConfig, ExtractionConfig
from overlap_checker.core.document_reader import DocumentReader, find_document_files
from overlap_checker.core.logging_config import setup_logging
from overlap_checker.core.models import similarity_level
from overlap_checker.core.session import DetectionSession
from overlap_checker.core.similarity import SimilarityEngine
from overlap_checker.core.validation import ValidationError


def parse_args():
    parser = argparse.ArgumentParser(
        description="Check every PDF/TXT document in a directory against the ones before it."
    )
    parser.add_argument("directory", help="Directory containing .pdf and .txt files")
    return parser.parse_args()


def main():
    load_dotenv()
    args = parse_args()

    setup_logging(
        log_level=os.getenv("LOG_LEVEL", "WARNING"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        structured_logging=os.getenv("LOG_STRUCTURED", "true").lower() == "true",
        enable_console=False,
    )
    logger = logging.getLogger(__name__)

    # Step 1: Load configuration and find documents
    try:
        extraction_config = ExtractionConfig.from_env()
        session = DetectionSession(
            engine=SimilarityEngine(DetectorConfig.from_env()),
            reader=DocumentReader(extraction_config),
            config=extraction_config,
        )
        files = find_document_files(args.directory)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1
    print(f"Found {len(files)} documents.")

    # Step 2: Check each document against everything submitted before it
    checked = []
    skipped = []
    for path in tqdm(files, desc="Checking documents", unit="doc"):
        try:
            checked.append(session.submit_file(path))
        except ValidationError as e:
            logger.warning(f"Skipping {path}: {e}", extra={"file_path": path})
            skipped.append((os.path.basename(path), str(e)))

    # Step 3: Report
    print("\nDocument similarity (against the most similar earlier document):")
    for result in checked:
        pages = f", {result.page_count} pages" if result.page_count else ""
        print(f"{result.file_name}: {result.similarity}% ({similarity_level(result.similarity)}), "
              f"{result.word_count} words{pages}")
        for match in result.matches:
            print(f"    {match.similarity}% from {match.source_file}: {match.sentence}")

    if skipped:
        print("\nSkipped documents:")
        for name, reason in skipped:
            print(f"{name}: {reason}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
