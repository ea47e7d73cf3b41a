# Choices, multipliers, win evaluation and payouts

import pytest

from carddraw.engine.choice import (Category, Bet, MultiplierTable, IndividualChoice, SuitChoice,
                                    ColourChoice, NumberChoice, make_choice, multiplier_for,
                                    parse_bet_amount, choice_options)
from carddraw.engine.deck import Card, Suit, Colour
from carddraw.engine.errors import ValidationError
from carddraw.engine.outcome import evaluate, resolve_round_outcome, payout, round_half_up


def c(text):
	return Card.parse(text)


def test_make_choice_per_category():
	assert make_choice("individual", "QH") == IndividualChoice("Q", Suit.HEARTS)
	assert make_choice("suit", "spades") == SuitChoice(Suit.SPADES)
	assert make_choice("color", "black") == ColourChoice(Colour.BLACK)
	assert make_choice(Category.NUMBER, "7") == NumberChoice("7")
	assert make_choice("number", "7").category == Category.NUMBER
	with pytest.raises(ValidationError):
		make_choice("parity", "odd")
	with pytest.raises(ValidationError):
		make_choice("number", "14")


@pytest.mark.parametrize("text", ["0", "-5", "abc", "", "2.5", 0, -1, True])
def test_bad_bets_rejected(text):
	with pytest.raises(ValidationError):
		parse_bet_amount(text)


def test_good_bets_parsed():
	assert parse_bet_amount("10") == 10
	assert parse_bet_amount(" 25 ") == 25
	assert parse_bet_amount(3) == 3


def test_bet_requires_choice_and_positive_int():
	with pytest.raises(ValidationError):
		Bet(amount=0, choice=SuitChoice(Suit.HEARTS))
	with pytest.raises(ValidationError):
		Bet(amount=5, choice="hearts")
	assert str(Bet(5, SuitChoice(Suit.HEARTS))) == "$5 on Suit HEARTS"


def test_multiplier_defaults_loaded():
	table = MultiplierTable.load_default()
	assert table == MultiplierTable(17.4, 2.17, 1.46, 4.61, 4.34)


def test_multiplier_load_missing_file_falls_back(tmp_path):
	assert MultiplierTable.load_default(tmp_path / "missing.json") == MultiplierTable()


def test_multiplier_for_each_category():
	table = MultiplierTable()
	assert multiplier_for(IndividualChoice("A", Suit.CLUBS), table) == 17.4
	assert multiplier_for(SuitChoice(Suit.CLUBS), table) == 2.17
	assert multiplier_for(ColourChoice(Colour.RED), table) == 1.46
	assert multiplier_for(NumberChoice("Q"), table) == 4.61
	assert multiplier_for(NumberChoice("K"), table) == 4.34
	assert multiplier_for(NumberChoice("A"), table) == 4.61
	assert multiplier_for(NumberChoice("10"), table) == 4.34


def test_number_multiplier_unknown_rank_uses_odd():
	table = MultiplierTable(number_odd=3.0, number_even=9.0)
	assert multiplier_for(NumberChoice("?"), table) == 3.0


def test_multiplier_update_is_all_or_nothing():
	table = MultiplierTable.from_values("1.5", 2, "3", "4.5", 5.25)
	assert table == MultiplierTable(1.5, 2.0, 3.0, 4.5, 5.25)
	with pytest.raises(ValidationError):
		MultiplierTable.from_values("1.5", "two", 3, 4, 5)
	with pytest.raises(ValidationError):
		MultiplierTable.from_values(1, 2, 3, 4, 0)
	with pytest.raises(ValidationError):
		MultiplierTable.from_values(1, 2, 3, "nan", 5)
	with pytest.raises(ValidationError):
		MultiplierTable.from_values(True, 2, 3, 4, 5)
	with pytest.raises(ValidationError):
		MultiplierTable.from_values(1, 2, 3, 4, False)


def test_evaluate_each_category():
	card = c("7D")
	assert evaluate(card, IndividualChoice("7", Suit.DIAMONDS))
	assert not evaluate(card, IndividualChoice("7", Suit.HEARTS))
	assert evaluate(card, SuitChoice(Suit.DIAMONDS))
	assert not evaluate(card, SuitChoice(Suit.CLUBS))
	assert evaluate(card, ColourChoice(Colour.RED))
	assert not evaluate(card, ColourChoice(Colour.BLACK))
	assert evaluate(card, NumberChoice("7"))
	assert not evaluate(card, NumberChoice("8"))
	assert not evaluate(None, NumberChoice("7"))


def test_outcome_single_match_in_window():
	history = [c("2S"), c("KH"), c("7D")]
	outcome = resolve_round_outcome(history, NumberChoice("7"))
	assert outcome.won
	assert outcome.matching_card == c("7D")
	assert outcome.hits == [c("7D")]


def test_outcome_most_recent_match_wins_tie():
	history = [c("2H"), c("3S"), c("9H")]
	outcome = resolve_round_outcome(history, ColourChoice(Colour.RED))
	assert outcome.won
	assert outcome.matching_card == c("9H")
	assert outcome.hits == [c("2H"), c("9H")]
	assert outcome.display_card == c("9H")


def test_outcome_ignores_draws_outside_window():
	history = [c("7C"), c("2S"), c("KH"), c("4D")]
	outcome = resolve_round_outcome(history, NumberChoice("7"))
	assert not outcome.won
	assert outcome.matching_card is None
	assert outcome.window == [c("2S"), c("KH"), c("4D")]
	assert outcome.display_card == c("4D")


def test_outcome_older_card_in_window_still_wins():
	history = [c("QS"), c("2D"), c("3D")]
	outcome = resolve_round_outcome(history, IndividualChoice("Q", Suit.SPADES))
	assert outcome.won
	assert outcome.matching_card == c("QS")


def test_outcome_with_short_and_empty_history():
	assert resolve_round_outcome([c("AH")], SuitChoice(Suit.HEARTS)).won
	empty = resolve_round_outcome([], SuitChoice(Suit.HEARTS))
	assert not empty.won
	assert empty.display_card is None
	assert empty.describe_window() == "No cards were drawn."


def test_payout_rounding_and_loss():
	assert payout(10, 4.34, True) == 43
	assert payout(10, 4.61, True) == 46
	assert payout(10, 2.17, True) == 22
	assert payout(10, 2.17, False) == -10
	assert payout(1, 2.5, True) == 3
	assert round_half_up(0.5) == 1
	assert round_half_up(2.5) == 3


def test_choice_options_cover_category():
	assert len(choice_options(Category.INDIVIDUAL)) == 52
	assert choice_options(Category.SUIT) == list(Suit)
	assert choice_options(Category.COLOUR) == list(Colour)
	assert choice_options(Category.NUMBER)[-3:] == ["J", "Q", "K"]
