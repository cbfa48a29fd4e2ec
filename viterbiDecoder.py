import logging
import math
import multiprocessing
from concurrent.futures import ProcessPoolExecutor

from constants import Constants
from corpusLoader import read_sentences, tokenize
from errors import DeadEndError

logger = logging.getLogger(__name__)

NEG_INF = -math.inf


class ViterbiDecoder:
    """Bigram Viterbi decoding over an immutable HmmModel.

    Scores live in log space. Every call keeps its DP columns and backpointers
    local, so one decoder can be shared by any number of callers.
    """

    def __init__(self, model, unseen_penalty=Constants.UNSEEN_PENALTY, dead_end=Constants.DEAD_END_POLICY,
                 start_pos=Constants.START_POS):
        if dead_end not in Constants.DEAD_END_POLICIES:
            raise ValueError(f"unknown dead-end policy {dead_end!r}, expected one of {Constants.DEAD_END_POLICIES}")
        self.model = model
        self.unseen_penalty = unseen_penalty
        self.dead_end = dead_end
        self.start_pos = start_pos

    def emission_score(self, tag, word):
        score = self.model.emissions.log_prob(tag, word)
        if score is None:
            return self.unseen_penalty
        return score

    def viterbi_step(self, column, word):
        """Scores and backpointers of the next column.

        A candidate replaces the running best only if it is strictly greater,
        so the first source state in enumeration order wins ties.
        """
        transitions = self.model.transitions
        scores = {}
        backpointers = {}
        for cur_pos, cur_score in column.items():
            if cur_pos not in transitions:
                continue
            for next_pos, transition_score in transitions[cur_pos].items():
                if next_pos == self.start_pos:
                    continue
                candidate = cur_score + transition_score + self.emission_score(next_pos, word)
                if candidate > scores.get(next_pos, NEG_INF):
                    scores[next_pos] = candidate
                    backpointers[next_pos] = cur_pos
        return scores, backpointers

    def restart_step(self, position, column, word):
        """Start a fresh sentence at `position`, continuing from the best tag so far."""
        best_prev, best_score = self.best_state(column)
        if self.dead_end == Constants.RAISE or best_prev == self.start_pos:
            raise DeadEndError(position, word)

        logger.debug("dead end at position %d (%r), restarting after %s", position, word, best_prev)
        scores, _ = self.viterbi_step({self.start_pos: best_score}, word)
        if not scores:
            raise DeadEndError(position, word)
        return scores, {tag: best_prev for tag in scores}

    @staticmethod
    def best_state(column):
        best_pos, best_score = None, NEG_INF
        for pos, score in column.items():
            if score > best_score:
                best_pos, best_score = pos, score
        return best_pos, best_score

    def viterbi_forward_pass(self, sentence):
        column = {self.start_pos: 0.0}
        backpointers = []
        for i, word in enumerate(sentence):
            scores, pointers = self.viterbi_step(column, word)
            if not scores:
                scores, pointers = self.restart_step(i, column, word)
            backpointers.append(pointers)
            column = scores
        return column, backpointers

    def viterbi_backward_pass(self, column, backpointers):
        best_pos, _ = self.best_state(column)
        best_tagging = [best_pos]
        for pointers in reversed(backpointers[1:]):
            best_pos = pointers[best_pos]
            best_tagging.append(best_pos)
        return best_tagging[::-1]

    def decode(self, sentence):
        if not sentence:
            return []
        column, backpointers = self.viterbi_forward_pass(sentence)
        return self.viterbi_backward_pass(column, backpointers)

    def tag_line(self, line):
        return self.decode(tokenize(line, lowercase=True))

    def predict(self, sentences):
        return [self.decode(sentence) for sentence in sentences]

    def tag_file(self, path):
        """Tags every line of a sentence file and returns all tags in order.

        A missing or unreadable file is logged by the loader and tags whatever
        could be read.
        """
        result = read_sentences(path, lowercase=True)
        all_tags = []
        for sentence in result.sentences:
            all_tags.extend(self.decode(sentence))
        return all_tags

    def parallel_predict(self, sentences, num_processes=None):
        if num_processes is None:
            num_processes = max(1, multiprocessing.cpu_count() - 1)
        if num_processes <= 1 or len(sentences) < 2:
            return self.predict(sentences)

        chunk_size = max(1, len(sentences) // num_processes)
        chunks = [(self, sentences[i:i + chunk_size]) for i in range(0, len(sentences), chunk_size)]

        predictions = []
        with ProcessPoolExecutor(max_workers=num_processes) as executor:
            for chunk_predictions in executor.map(_predict_chunk, chunks):
                predictions.extend(chunk_predictions)
        return predictions


def _predict_chunk(args):
    decoder, sentences = args
    return decoder.predict(sentences)


def decode(model, sentence, unseen_penalty=Constants.UNSEEN_PENALTY, dead_end=Constants.DEAD_END_POLICY):
    return ViterbiDecoder(model, unseen_penalty=unseen_penalty, dead_end=dead_end).decode(sentence)
