"""
Bulk transcription of text files stored in Cloud Storage.

Every ``.txt`` object under ``INPUT_PREFIX`` in ``INPUT_BUCKET`` is run
through the transcription engine and written to ``OUTPUT_PREFIX`` in
``OUTPUT_BUCKET`` under the same file name.  ``main`` has the signature
of a background Cloud Function, so it can be deployed as one or run from
the command line.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from google.cloud import storage

from .engine import Transcriber, default_transcriber

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "transcritor"
DEFAULT_INPUT_PREFIX = "textos/"
DEFAULT_OUTPUT_PREFIX = "transcricoes/"


def list_text_blobs(bucket: storage.Bucket, prefix: str) -> List[storage.Blob]:
    return [
        blob
        for blob in bucket.list_blobs(prefix=prefix)
        if blob.name.lower().endswith(".txt")
    ]


def output_name(blob_name: str, output_prefix: str) -> str:
    """Map ``textos/a/b.txt`` to ``<output_prefix>b.txt``."""
    return output_prefix + os.path.basename(blob_name)


def transcribe_bucket(
    client: storage.Client,
    bucket_name: str,
    *,
    input_prefix: str = DEFAULT_INPUT_PREFIX,
    output_bucket: Optional[str] = None,
    output_prefix: str = DEFAULT_OUTPUT_PREFIX,
    transcriber: Optional[Transcriber] = None,
) -> Dict[str, int]:
    """Transcribe every text object under ``input_prefix``.

    A blob that fails is logged and skipped so one bad file does not stop
    the batch.

    Returns:
        Counts of ``transcribed`` and ``failed`` blobs.
    """
    transcriber = transcriber or default_transcriber()
    source = client.bucket(bucket_name)
    target = client.bucket(output_bucket or bucket_name)
    counts = {"transcribed": 0, "failed": 0}
    for blob in list_text_blobs(source, input_prefix):
        try:
            result = transcriber.transcribe(blob.download_as_text())
            out_name = output_name(blob.name, output_prefix)
            target.blob(out_name).upload_from_string(
                result, content_type="text/plain; charset=utf-8"
            )
        except Exception:
            logger.exception("Failed to transcribe %s", blob.name)
            counts["failed"] += 1
            continue
        logger.info("Saved %s", out_name)
        counts["transcribed"] += 1
    return counts


def main(event: Optional[Dict[str, Any]] = None, context: Any = None) -> Dict[str, int]:
    load_dotenv()
    bucket_name = os.environ.get("INPUT_BUCKET", DEFAULT_BUCKET)
    counts = transcribe_bucket(
        storage.Client(),
        bucket_name,
        input_prefix=os.environ.get("INPUT_PREFIX", DEFAULT_INPUT_PREFIX),
        output_bucket=os.environ.get("OUTPUT_BUCKET", bucket_name),
        output_prefix=os.environ.get("OUTPUT_PREFIX", DEFAULT_OUTPUT_PREFIX),
    )
    logger.info(
        "Batch finished: %d transcribed, %d failed",
        counts["transcribed"],
        counts["failed"],
    )
    return counts


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
