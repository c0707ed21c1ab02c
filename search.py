# search.py - Seekr TF-IDF ranking over an in-memory index
# index layout: {document: {term: count}}

import math
import sys
import logging

log = logging.getLogger("seekr-search")

# ─── CONFIG ───────────────────────────────────────────────────────────────────
PROMPT = ""


class ComputationError(Exception):
    """A relevance value is undefined for the given term or document."""


# ---------- LOOKUP ----------
def index_lookup(index, term):
    """Documents that contain `term`, sorted by document id."""
    return sorted(doc for doc, terms in index.items() if term in terms)


# ---------- SCORING ----------
def term_frequency(index, term, document):
    """tf(t, d) = count(t, d) / total term count of d"""
    terms = index.get(document)
    if terms is None:
        raise ComputationError(f"document {document!r} is not in the index")
    count = terms.get(term, 0)
    if not count:
        # Absent term is a valid zero, not an error.
        return 0.0
    return count / sum(terms.values())


def inverse_document_frequency(index, term):
    """idf(t, D) = ln(|D| / |{d in D : t in d}|)"""
    containing = sum(1 for terms in index.values() if term in terms)
    if not containing:
        raise ComputationError(f"term {term!r} does not occur in any document")
    return math.log(len(index) / containing)


def tfidf(index, term, document):
    return term_frequency(index, term, document) * inverse_document_frequency(index, term)


def score_documents(index, term):
    """
    Score every document containing `term`.
    Returns [(document, tfidf)] from most to least relevant; equal scores are
    ordered by ascending document id.
    Raises ComputationError if no document contains the term.
    """
    idf = inverse_document_frequency(index, term)

    scores = {}
    for doc in index_lookup(index, term):
        # index_lookup builds candidates from dict keys, so this cannot happen
        # unless the lookup itself is broken.
        assert doc not in scores, f"document {doc!r} is a candidate more than once"
        scores[doc] = term_frequency(index, term, doc) * idf

    ranked = sorted(scores.items(), key=lambda x: (-x[1], x[0]))
    log.debug(f"'{term}': {len(ranked)} candidates, idf={idf:.4f}")
    return ranked


def relevance_lookup(index, term):
    """Documents relevant to `term`, most relevant first."""
    return [doc for doc, _ in score_documents(index, term)]


# ---------- QUERY LOOP ----------
def normalize_query(line):
    return line.strip().lower()


def query_loop(index, stdin=None, stdout=None):
    """
    Read one query term per line until a blank line or end of input.
    Each query is echoed as "== <query>" followed by its ranked documents.
    """
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout
    while True:
        if PROMPT:
            print(PROMPT, end="", file=stdout, flush=True)
        line = stdin.readline()
        query = line.rstrip("\r\n")
        if not query:
            break
        print(f"== {query}", file=stdout)
        try:
            results = score_documents(index, normalize_query(query))
        except ComputationError as e:
            print(f"No results found: {e}", file=stdout)
            continue
        print("Results:", file=stdout)
        for doc, score in results:
            print(f"  {doc} ({score:.4f})", file=stdout)
