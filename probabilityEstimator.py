import logging
import math
from collections import defaultdict

from constants import Constants
from errors import AlignmentError
from logProbTable import HmmModel, LogProbTable

logger = logging.getLogger(__name__)


class ProbabilityEstimator:
    """Relative-frequency estimates of a bigram HMM, stored as log-probabilities.

    `words` and `tags` are flat, positionally aligned sequences in which every
    sentence starts with the start marker. An empty `words` sequence trains
    transitions only, leaving every emission to the unseen-word penalty.
    """

    def __init__(self, words, tags, start_pos=Constants.START_POS, terminal_pos=Constants.TERMINAL_POS):
        if words and tags and len(words) != len(tags):
            raise AlignmentError(f"{len(words)} words but {len(tags)} tags")
        self.words = words
        self.tags = tags
        self.start_pos = start_pos
        self.terminal_pos = terminal_pos

    def count_emissions(self):
        tag_word_counter = defaultdict(lambda: defaultdict(int))
        for word, tag in zip(self.words, self.tags):
            tag_word_counter[tag][word] += 1

        # the start marker has no lexical realization
        tag_word_counter.pop(self.start_pos, None)
        return tag_word_counter

    def count_transitions(self):
        bigram_pos_counter = defaultdict(lambda: defaultdict(int))
        for cur_pos, next_pos in zip(self.tags, self.tags[1:]):
            bigram_pos_counter[cur_pos][next_pos] += 1

        # a sentence boundary always follows the terminal tag
        bigram_pos_counter.pop(self.terminal_pos, None)
        return bigram_pos_counter

    @staticmethod
    def normalize(d):
        log_probs = {}
        for outer, counts in d.items():
            total = sum(counts.values())
            log_probs[outer] = {inner: math.log(count / total) for inner, count in counts.items()}
        return LogProbTable(log_probs)

    def train_emissions(self):
        emissions = self.normalize(self.count_emissions())
        logger.info("emission table: %d tags, %d word types", len(emissions), len(emissions.inner_keys()))
        return emissions

    def train_transitions(self):
        transitions = self.normalize(self.count_transitions())
        logger.info("transition table: %d source tags", len(transitions))
        return transitions

    def train(self):
        return HmmModel(emissions=self.train_emissions(), transitions=self.train_transitions())


def train_emissions(tokens, tags):
    return ProbabilityEstimator(tokens, tags).train_emissions()


def train_transitions(tags):
    return ProbabilityEstimator(tags, tags).train_transitions()


def train_model(tokens, tags, terminal_pos=Constants.TERMINAL_POS):
    return ProbabilityEstimator(tokens, tags, terminal_pos=terminal_pos).train()
