import argparse
import logging
import sys

from accuracyEvaluator import error_rates, most_confused_tags, report, strip_start_markers
from constants import Constants
from corpusLoader import (flatten_with_markers, load_brown, load_training_corpus, read_sentences,
                          read_words_or_tags, split_sentences, unzip_tagged)
from errors import TaggerError
from probabilityEstimator import train_model
from viterbiDecoder import ViterbiDecoder

logger = logging.getLogger(__name__)


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def parse_args(argv):
    parser = argparse.ArgumentParser("hmm-tagger", description="Bigram HMM part-of-speech tagger")
    parser.add_argument("--train-words", help="Training sentences, one per line")
    parser.add_argument("--train-tags", help="Training tags, aligned with --train-words")
    parser.add_argument("--test-words", help="Sentences to tag")
    parser.add_argument("--test-tags", help="Gold tags for --test-words")
    parser.add_argument("--brown", action="store_true",
                        help="Train and test on the NLTK Brown corpus instead of files")
    parser.add_argument("--brown-categories", default=Constants.BROWN_CATEGORIES)
    parser.add_argument("--unseen-penalty", type=float, default=Constants.UNSEEN_PENALTY,
                        help="Log-probability used for unobserved emissions")
    parser.add_argument("--dead-end", choices=Constants.DEAD_END_POLICIES, default=Constants.DEAD_END_POLICY)
    parser.add_argument("--processes", type=positive_int, default=1, help="Worker processes for batch tagging")
    parser.add_argument("--strict", action="store_true", help="Fail on unreadable training files")
    parser.add_argument("--interactive", action="store_true", help="Tag sentences typed on stdin")
    parser.add_argument("--log-level", default="WARNING", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    args = parser.parse_args(argv)
    if not args.brown and not (args.train_words and args.train_tags):
        parser.error("either --brown or both --train-words and --train-tags are required")
    return args


def interactive_loop(decoder, input_stream=None, output=None):
    if input_stream is None:
        input_stream = sys.stdin
    if output is None:
        output = sys.stdout
    print("Please enter a sentence to have its parts of speech guessed", file=output)
    for line in input_stream:
        print(decoder.tag_line(line), file=output)


def evaluate(decoder, sentences, gold, processes=1):
    predictions = decoder.parallel_predict(sentences, num_processes=processes)
    predicted = [tag for sentence_tags in predictions for tag in sentence_tags]
    words = [word for sentence in sentences for word in sentence]

    report(predicted, gold)
    known_error_rate, unknown_error_rate, overall_error_rate = error_rates(
        words, gold, predicted, decoder.model.vocabulary)
    print(f"Known words error rate: {known_error_rate:.4f}")
    print(f"Unknown words error rate: {unknown_error_rate:.4f}")
    print(f"Overall error rate: {overall_error_rate:.4f}")

    print("Confusion matrix investigation:")
    for tag, confused_with in most_confused_tags(gold, predicted).items():
        if confused_with is not None:
            print(f" for the true POS {tag}, the most frequent POS mistakenly predicted is {confused_with}")
    return predicted


def run(args):
    if args.brown:
        train_set, test_set = split_sentences(load_brown(args.brown_categories))
        train_words, train_tags = unzip_tagged(train_set)
        words, tags = flatten_with_markers(train_words), flatten_with_markers(train_tags)
        test_sentences, test_tags = unzip_tagged(test_set)
        gold = [tag for sentence_tags in test_tags for tag in sentence_tags]
    else:
        words, tags = load_training_corpus(args.train_words, args.train_tags, strict=args.strict)
        test_sentences, gold = None, None
        if args.test_words and args.test_tags:
            test_sentences = read_sentences(args.test_words, lowercase=True).sentences
            gold = strip_start_markers(read_words_or_tags(args.test_tags, tags=True))

    model = train_model(words, tags)
    logger.info("trained model: %d tags, %d word types", len(model.tags), len(model.vocabulary))
    decoder = ViterbiDecoder(model, unseen_penalty=args.unseen_penalty, dead_end=args.dead_end)

    if test_sentences is not None:
        evaluate(decoder, test_sentences, gold, processes=args.processes)
    if args.interactive:
        interactive_loop(decoder)


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        run(args)
    except TaggerError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
