import io

import pytest

import main
from viterbiDecoder import ViterbiDecoder


@pytest.fixture
def test_files(tmp_path):
    words_path = tmp_path / "test-sentences.txt"
    tags_path = tmp_path / "test-tags.txt"
    words_path.write_text("The cat runs .\nA dog sleeps\n", encoding="utf-8")
    tags_path.write_text("DET NOUN VERB .\nDET NOUN VERB\n", encoding="utf-8")
    return words_path, tags_path


def test_train_and_evaluate(corpus_files, test_files, capsys):
    train_words, train_tags = corpus_files
    test_words, test_tags = test_files
    exit_code = main.main([
        "--train-words", str(train_words), "--train-tags", str(train_tags),
        "--test-words", str(test_words), "--test-tags", str(test_tags),
    ])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert "7 tags correct out of 7 total, with an accuracy of 100.00%" in out
    assert "Overall error rate: 0.0000" in out


def test_strict_missing_training_file(corpus_files, tmp_path):
    _, train_tags = corpus_files
    exit_code = main.main([
        "--train-words", str(tmp_path / "missing.txt"), "--train-tags", str(train_tags), "--strict",
    ])
    assert exit_code == 1


def test_training_files_are_required():
    with pytest.raises(SystemExit):
        main.parse_args([])


def test_brown_corpus(monkeypatch, capsys):
    corpus = [[("the", "AT"), ("dog", "NN"), ("runs", "VBZ"), (".", ".")] for _ in range(10)]
    monkeypatch.setattr(main, "load_brown", lambda categories: corpus)
    assert main.main(["--brown"]) == 0
    assert "4 tags correct out of 4 total" in capsys.readouterr().out


def test_interactive_loop(model):
    output = io.StringIO()
    main.interactive_loop(ViterbiDecoder(model), io.StringIO("The dog runs .\nthe zebra\n"), output)
    lines = output.getvalue().splitlines()
    assert lines[0] == "Please enter a sentence to have its parts of speech guessed"
    assert lines[1] == "['DET', 'NOUN', 'VERB', '.']"
    assert lines[2] == "['DET', 'NOUN']"


@pytest.mark.parametrize("option", [["--processes", "0"], ["--processes", "-1"], ["--log-level", "LOUD"]])
def test_bad_option_values_are_rejected(corpus_files, option):
    train_words, train_tags = corpus_files
    with pytest.raises(SystemExit):
        main.parse_args(["--train-words", str(train_words), "--train-tags", str(train_tags)] + option)


def test_log_level_is_case_insensitive(corpus_files):
    train_words, train_tags = corpus_files
    args = main.parse_args(["--train-words", str(train_words), "--train-tags", str(train_tags),
                            "--log-level", "info"])
    assert args.log_level == "INFO"


def test_training_summary_is_logged(corpus_files, caplog):
    train_words, train_tags = corpus_files
    with caplog.at_level("INFO", logger="main"):
        assert main.main(["--train-words", str(train_words), "--train-tags", str(train_tags)]) == 0
    assert "trained model: 4 tags, 7 word types" in caplog.text
