import math

import pytest

from errors import AlignmentError
from probabilityEstimator import ProbabilityEstimator, train_emissions, train_model, train_transitions


def test_emission_rows_sum_to_one(corpus):
    emissions = train_emissions(*corpus)
    assert len(emissions) > 0
    for tag in emissions:
        assert emissions.row_mass(tag) == pytest.approx(1.0, abs=1e-6)


def test_transition_rows_sum_to_one(corpus):
    _, tags = corpus
    transitions = train_transitions(tags)
    assert len(transitions) > 0
    for tag in transitions:
        assert transitions.row_mass(tag) == pytest.approx(1.0, abs=1e-6)


def test_emission_relative_frequencies(corpus):
    emissions = train_emissions(*corpus)
    assert emissions["DET"]["the"] == pytest.approx(math.log(2 / 3))
    assert emissions["DET"]["a"] == pytest.approx(math.log(1 / 3))
    assert emissions["NOUN"]["cat"] == pytest.approx(math.log(2 / 3))


def test_start_marker_has_no_emissions(corpus):
    emissions = train_emissions(*corpus)
    assert "#" not in emissions


def test_terminal_tag_is_not_a_transition_source(corpus):
    _, tags = corpus
    transitions = train_transitions(tags)
    assert "." not in transitions
    assert transitions["#"]["DET"] == 0.0
    assert transitions["VERB"]["."] == 0.0


def test_transitions_cross_sentence_boundaries():
    transitions = train_transitions(["#", "NOUN", "VERB", "#", "NOUN", "NOUN"])
    assert transitions["VERB"]["#"] == 0.0
    assert transitions["NOUN"]["VERB"] == pytest.approx(math.log(1 / 2))
    assert transitions["NOUN"]["NOUN"] == pytest.approx(math.log(1 / 2))


def test_keys_keep_first_seen_order():
    transitions = train_transitions(["#", "B", "#", "A", "#", "B"])
    assert list(transitions["#"]) == ["B", "A"]


def test_misaligned_sequences_are_rejected():
    with pytest.raises(AlignmentError):
        ProbabilityEstimator(["#", "dog"], ["#", "NOUN", "VERB"])


def test_empty_words_train_transitions_only(corpus):
    _, tags = corpus
    model = train_model([], tags)
    assert len(model.emissions) == 0
    assert "#" in model.transitions


def test_empty_corpus_gives_empty_model():
    model = train_model([], [])
    assert len(model.emissions) == 0
    assert len(model.transitions) == 0
