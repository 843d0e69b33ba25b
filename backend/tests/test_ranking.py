from number_master.services.games.ranking import Score, best_of, is_better, rank_key


def test_fewer_attempts_wins_regardless_of_time():
    assert is_better(Score(2, 90.0), Score(3, 1.0))
    assert not is_better(Score(3, 1.0), Score(2, 90.0))


def test_equal_attempts_compares_time():
    assert is_better(Score(4, 10.5), Score(4, 10.51))
    assert not is_better(Score(4, 10.51), Score(4, 10.5))


def test_equal_on_both_fields_is_not_better():
    a = Score(5, 12.34)
    assert not is_better(a, a)
    assert not is_better(a, Score(5, 12.34))


def test_transitive():
    a, b, c = Score(1, 9.0), Score(2, 3.0), Score(2, 4.0)
    assert is_better(a, b) and is_better(b, c)
    assert is_better(a, c)


def test_rank_key_works_on_any_record_like_object():
    class Row:
        attempts = 3
        time_seconds = 7.25

    assert rank_key(Row()) == (3, 7.25)
    assert is_better(Score(3, 7.0), Row())


def test_best_of():
    assert best_of([]) is None
    scores = [Score(4, 2.0), Score(3, 9.0), Score(3, 8.5), Score(6, 0.5)]
    assert best_of(scores) == Score(3, 8.5)
