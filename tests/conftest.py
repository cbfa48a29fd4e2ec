import pytest

from corpusLoader import flatten_with_markers, tokenize
from probabilityEstimator import train_model

TRAIN_WORDS = [
    "The dog runs .",
    "A cat sleeps .",
    "the cat runs",
]
TRAIN_TAGS = [
    "DET NOUN VERB .",
    "DET NOUN VERB .",
    "DET NOUN VERB",
]


@pytest.fixture
def corpus():
    words = flatten_with_markers(tokenize(line, lowercase=True) for line in TRAIN_WORDS)
    tags = flatten_with_markers(tokenize(line) for line in TRAIN_TAGS)
    return words, tags


@pytest.fixture
def model(corpus):
    return train_model(*corpus)


@pytest.fixture
def dog_run_model():
    return train_model(["#", "dog", "run"], ["#", "NOUN", "VERB"])


@pytest.fixture
def corpus_files(tmp_path):
    words_path = tmp_path / "train-sentences.txt"
    tags_path = tmp_path / "train-tags.txt"
    words_path.write_text("\n".join(TRAIN_WORDS) + "\n", encoding="utf-8")
    tags_path.write_text("\n".join(TRAIN_TAGS) + "\n", encoding="utf-8")
    return words_path, tags_path
