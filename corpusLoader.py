import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import nltk
from nltk.corpus import brown
from sklearn.model_selection import train_test_split

from constants import Constants
from errors import AlignmentError, CorpusReadError

logger = logging.getLogger(__name__)


class CorpusStatus(enum.Enum):
    OK = "ok"
    MISSING = "missing"
    READ_ERROR = "read error"


@dataclass
class CorpusResult:
    """Sentences read from one file, plus how the read went.

    A missing file gives no sentences; a read error keeps the sentences read
    before it happened.
    """
    path: str
    status: CorpusStatus
    sentences: list = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self):
        return self.status is CorpusStatus.OK

    @property
    def tokens(self):
        return flatten_with_markers(self.sentences)

    def unwrap(self):
        if not self.ok:
            raise CorpusReadError(self.path, self.status, self.error)
        return self.sentences


def tokenize(line, lowercase=False):
    if lowercase:
        line = line.lower()
    return line.split()


def flatten_with_markers(sentences, start_pos=Constants.START_POS):
    tokens = []
    for sentence in sentences:
        tokens.append(start_pos)
        tokens.extend(sentence)
    return tokens


def read_sentences(path, lowercase=False):
    """One sentence per line, whitespace separated; words are lower-cased, tags are not."""
    try:
        f = open(path, "rb")
    except FileNotFoundError as e:
        logger.error("Cannot open file %s: %s", path, e)
        return CorpusResult(str(path), CorpusStatus.MISSING, [], str(e))
    except OSError as e:
        logger.error("Cannot open file %s: %s", path, e)
        return CorpusResult(str(path), CorpusStatus.READ_ERROR, [], str(e))

    sentences = []
    try:
        with f:
            # a bad byte ends the read at its own line
            for raw in f:
                sentences.append(tokenize(raw.decode("utf-8"), lowercase))
    except (OSError, UnicodeDecodeError) as e:
        logger.error("IO error while reading %s after %d lines: %s", path, len(sentences), e)
        return CorpusResult(str(path), CorpusStatus.READ_ERROR, sentences, str(e))

    return CorpusResult(str(path), CorpusStatus.OK, sentences)


def read_words_or_tags(path, tags):
    """Flat token list with a start marker in front of every line."""
    return read_sentences(path, lowercase=not tags).tokens


def check_alignment(word_sentences, tag_sentences):
    if len(word_sentences) != len(tag_sentences):
        raise AlignmentError(f"{len(word_sentences)} word lines but {len(tag_sentences)} tag lines")
    for line_no, (words, tags) in enumerate(zip(word_sentences, tag_sentences), start=1):
        if len(words) != len(tags):
            raise AlignmentError(f"line {line_no}: {len(words)} words but {len(tags)} tags")


def load_training_corpus(words_path, tags_path, strict=False):
    """Reads aligned sentence/tag files into flat word and tag sequences.

    Without `strict` a side that could not be read degrades: a missing file
    contributes nothing, and after a read error only the lines both files
    provide are kept.
    """
    words_result = read_sentences(words_path, lowercase=True)
    tags_result = read_sentences(tags_path, lowercase=False)
    if strict:
        words_result.unwrap()
        tags_result.unwrap()

    word_sentences, tag_sentences = words_result.sentences, tags_result.sentences
    if not words_result.ok or not tags_result.ok:
        if word_sentences and tag_sentences:
            n = min(len(word_sentences), len(tag_sentences))
            word_sentences, tag_sentences = word_sentences[:n], tag_sentences[:n]
        logger.warning("training on a partial corpus: %d word lines, %d tag lines",
                       len(word_sentences), len(tag_sentences))

    if word_sentences and tag_sentences:
        check_alignment(word_sentences, tag_sentences)
    return flatten_with_markers(word_sentences), flatten_with_markers(tag_sentences)


def clean_tag(tag):
    # keep the prefix before the first '+', '-', '*' or '$'
    match = re.match(r'[^+\-*\$]*', tag)
    prefix = match.group()
    if prefix:
        return prefix
    return tag


def load_brown(categories=Constants.BROWN_CATEGORIES, simplify_tags=True, download=True):
    """Brown corpus tagged sentences as lists of (lower-cased word, tag) pairs."""
    if download:
        nltk.download('brown', quiet=True)
    tagged_sents = brown.tagged_sents(categories=categories)
    corpus = []
    for sentence in tagged_sents:
        corpus.append([(word.lower(), clean_tag(tag) if simplify_tags else tag) for word, tag in sentence])
    logger.info("loaded %d Brown sentences (%s)", len(corpus), categories)
    return corpus


def split_sentences(corpus, test_size=Constants.TEST_SIZE):
    train_set, test_set = train_test_split(corpus, test_size=test_size, shuffle=False)
    return train_set, test_set


def unzip_tagged(corpus):
    """Tagged sentences -> (word sentences, tag sentences)."""
    word_sentences = [[word for word, _ in sentence] for sentence in corpus]
    tag_sentences = [[tag for _, tag in sentence] for sentence in corpus]
    return word_sentences, tag_sentences
