# indexer.py - Seekr Local File Indexer
# Builds an in-memory term-frequency index over every file below a directory,
# reading the files concurrently and reducing the results into one mapping.

import os
import re
import time
import queue
import logging
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, wait

log = logging.getLogger("seekr-indexer")

# ─── CONFIG ───────────────────────────────────────────────────────────────────
MAX_WORKERS   = None      # None -> executor default
FILE_ENCODING = "utf-8"
WORD_RE       = re.compile(r"[a-zA-Z]+(?:['-][a-zA-Z]+)*")

_DONE = object()          # end-of-stream marker for the reducer queue


# ─── ERRORS ───────────────────────────────────────────────────────────────────
class FileSystemError(Exception):
    """A directory in the tree could not be listed. Fatal to the whole run."""

    def __init__(self, path: str, cause: Exception):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class ReadError(Exception):
    """A single document could not be read. Only that document is skipped."""

    def __init__(self, document: str, cause: Exception):
        super().__init__(f"{document}: {cause}")
        self.document = document
        self.cause = cause


# ─── TEXT HELPERS ─────────────────────────────────────────────────────────────
def tokenize(line: str) -> list:
    """Lower-cased words of a line, in order, duplicates kept."""
    return [w.lower() for w in WORD_RE.findall(line)]


# ─── FILE I/O ─────────────────────────────────────────────────────────────────
def find_files(directory: str) -> list:
    """Recursively list every file below `directory`."""
    def _fail(err):
        raise FileSystemError(err.filename or directory, err)

    documents = []
    for root, dirs, files in os.walk(directory, onerror=_fail):
        for filename in files:
            documents.append(os.path.join(root, filename))
    return documents


def read_lines(document: str) -> list:
    try:
        with open(document, "r", encoding=FILE_ENCODING, errors="ignore") as f:
            return f.read().splitlines()
    except OSError as e:
        raise ReadError(document, e) from e


# ─── EXTRACTION ───────────────────────────────────────────────────────────────
def frequencies(document: str) -> dict:
    """
    Term frequency of a single document: {term: count}.
    Raises ReadError if the document cannot be read.
    """
    counts = Counter()
    for line in read_lines(document):
        counts.update(tokenize(line))
    log.debug(f"  Indexed: {document} ({sum(counts.values())} tokens)")
    return dict(counts)


def _extract(document: str, results: queue.Queue) -> bool:
    # Runs on a worker thread. Read failures stop here and never reach the reducer.
    try:
        freq = frequencies(document)
    except ReadError as e:
        log.warning(f"Skipping {e.document}: {e.cause}")
        return False
    results.put((document, freq))
    return True


# ─── REDUCER ──────────────────────────────────────────────────────────────────
def reduce_documents(results) -> dict:
    """
    Assemble (document, frequencies) pairs into the search index.
    `results` is either an iterable of pairs or a queue terminated by the
    end-of-stream marker. A repeated document overwrites the earlier entry.
    """
    index = {}
    if isinstance(results, queue.Queue):
        results = iter(results.get, _DONE)
    for document, freq in results:
        index[document] = freq
    return index


# ─── COORDINATOR ──────────────────────────────────────────────────────────────
def build_index(documents, max_workers: int = MAX_WORKERS) -> dict:
    """
    Extract every document concurrently and reduce the results into
    {document: {term: count}}. Documents that fail to read are left out.
    Returns only after every extraction has finished.
    """
    documents = list(documents)
    start = time.time()
    results = queue.Queue()
    reduced = {}

    def _reducer():
        reduced["index"] = reduce_documents(results)

    reducer = threading.Thread(target=_reducer, name="seekr-reducer", daemon=True)
    reducer.start()
    try:
        with ThreadPoolExecutor(max_workers=max_workers,
                                thread_name_prefix="seekr-extract") as pool:
            tasks = [pool.submit(_extract, doc, results) for doc in documents]
            wait(tasks)
    finally:
        results.put(_DONE)
        reducer.join()

    # Anything other than a ReadError is a bug; let it surface.
    skipped = sum(1 for task in tasks if not task.result())

    index = reduced["index"]
    terms = {term for freq in index.values() for term in freq}
    log.info(
        f"Indexed {len(index)} documents ({skipped} skipped, "
        f"{len(terms)} unique terms) in {time.time() - start:.2f}s"
    )
    return index


def read_directory(directory: str, max_workers: int = MAX_WORKERS) -> dict:
    """Discover and index every file below `directory`. Raises FileSystemError."""
    files = find_files(directory)
    log.info(f"Scanning {directory}: {len(files)} files found")
    return build_index(files, max_workers=max_workers)
