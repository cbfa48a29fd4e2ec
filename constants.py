class Constants:
    # pseudo tag/token prepended to every sentence
    START_POS = "#"
    # sentence-final punctuation class, never a transition source
    TERMINAL_POS = "."
    # log-probability used when a (tag, word) emission was never observed
    UNSEEN_PENALTY = -30.0

    RESTART = "restart"
    RAISE = "raise"
    DEAD_END_POLICIES = (RESTART, RAISE)
    DEAD_END_POLICY = RESTART

    BROWN_CATEGORIES = "news"
    TEST_SIZE = 0.1
