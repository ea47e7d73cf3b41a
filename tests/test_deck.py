# Deck and card model: membership edits, parity mapping, draws

import random

import pytest

from carddraw.engine.deck import (Card, Deck, Suit, Colour, RANKS, all_cards, rank_value,
                                  is_odd_rank, is_even_rank, parse_rank)
from carddraw.engine.errors import ValidationError


def test_full_deck_has_each_card_once():
	deck = Deck.standard_52(seed=1)
	assert deck.size() == 52
	assert len(set(deck.cards)) == 52
	assert set(deck.cards) == {Card(r, s) for r in RANKS for s in Suit}


def test_reset_to_full_after_edits():
	deck = Deck.standard_52(seed=1)
	deck.remove_suit(Suit.HEARTS)
	deck.draw_random()
	deck.remove_faces()
	assert deck.reset_to_full() is True
	assert deck.size() == 52
	assert len(set(deck.cards)) == 52
	assert deck.reset_to_full() is False


def test_rank_value_mapping_q_after_k():
	assert rank_value("A") == 1
	assert rank_value("10") == 10
	assert rank_value("J") == 11
	assert rank_value("K") == 12
	assert rank_value("Q") == 13
	assert rank_value("Z") is None
	assert is_odd_rank("Q")
	assert is_even_rank("K")
	assert not is_odd_rank("nope") and not is_even_rank("nope")


def test_card_derived_properties():
	assert Card("Q", Suit.HEARTS).colour == Colour.RED
	assert Card("2", Suit.DIAMONDS).colour == Colour.RED
	assert Card("2", Suit.CLUBS).colour == Colour.BLACK
	assert Card("K", Suit.SPADES).is_face_card
	assert not Card("A", Suit.SPADES).is_face_card
	assert str(Card("7", Suit.DIAMONDS)) == "7♦"
	assert Card("Q", Suit.SPADES).value == 13


def test_card_parse_notations():
	assert Card.parse("7D") == Card("7", Suit.DIAMONDS)
	assert Card.parse("10h") == Card("10", Suit.HEARTS)
	assert Card.parse("Q♠") == Card("Q", Suit.SPADES)
	assert Card.parse("td") == Card("10", Suit.DIAMONDS)
	with pytest.raises(ValidationError):
		Card.parse("X")
	with pytest.raises(ValidationError):
		Card.parse("1H")
	with pytest.raises(ValidationError):
		Card.parse("7X")


def test_suit_and_colour_parse():
	assert Suit.parse("hearts") == Suit.HEARTS
	assert Suit.parse("S") == Suit.SPADES
	assert Suit.parse("♣") == Suit.CLUBS
	assert Colour.parse("red") == Colour.RED
	assert parse_rank("q") == "Q"
	with pytest.raises(ValidationError):
		Suit.parse("stars")
	with pytest.raises(ValidationError):
		Colour.parse("green")


@pytest.mark.parametrize("card", all_cards())
def test_remove_and_add_specific_card_idempotent(card):
	deck = Deck.standard_52(seed=0)
	assert deck.remove_card(card) is True
	assert not deck.contains(card)
	assert deck.remove_card(card) is False
	assert deck.size() == 51
	assert deck.add_card(card) is True
	assert deck.contains(card)
	assert deck.add_card(card) is False
	assert deck.size() == 52


def test_remove_odd_leaves_even_ranks():
	deck = Deck.standard_52(seed=0)
	assert deck.remove_odd() is True
	assert deck.size() == 24
	assert {c.rank for c in deck} == {"2", "4", "6", "8", "10", "K"}
	assert deck.remove_odd() is False


def test_remove_even_leaves_odd_ranks():
	deck = Deck.standard_52(seed=0)
	deck.remove_even()
	assert deck.size() == 28
	assert {c.rank for c in deck} == {"A", "3", "5", "7", "9", "J", "Q"}


def test_add_odd_and_even_do_not_duplicate():
	deck = Deck.standard_52(seed=0)
	deck.clear()
	assert deck.add_odd() is True
	assert deck.size() == 28
	assert deck.add_odd() is False
	assert deck.add_even() is True
	assert deck.size() == 52
	assert len(set(deck.cards)) == 52


def test_suit_and_colour_edits():
	deck = Deck.standard_52(seed=0)
	assert deck.remove_suit(Suit.HEARTS) is True
	assert deck.count_by_suit(Suit.HEARTS) == 0
	assert deck.size() == 39
	assert deck.remove_colour(Colour.RED) is True
	assert deck.size() == 26
	assert deck.count_by_colour(Colour.RED) == 0
	assert deck.add_suit(Suit.DIAMONDS) is True
	assert deck.add_colour(Colour.RED) is True
	assert deck.size() == 52
	assert deck.add_colour(Colour.RED) is False


def test_face_edits_and_counts():
	deck = Deck.standard_52(seed=0)
	assert deck.count_faces() == 12
	deck.remove_faces()
	assert deck.size() == 40
	assert deck.count_faces() == 0
	deck.remove_card(Card("J", Suit.CLUBS))
	deck.add_faces()
	assert deck.size() == 52
	assert deck.count_by_rank("Q") == 4
	assert deck.count_card("Q", Suit.HEARTS) == 1


def test_draw_random_shrinks_deck_until_empty():
	deck = Deck.standard_52(seed=42)
	drawn = []
	for n in range(52, 0, -1):
		card = deck.draw_random()
		assert card is not None
		assert deck.size() == n - 1
		assert not deck.contains(card)
		drawn.append(card)
	assert len(set(drawn)) == 52
	assert deck.draw_random() is None
	assert deck.size() == 0


def test_draw_random_is_roughly_uniform():
	counts = {}
	rng = random.Random(3)
	for _ in range(4000):
		deck = Deck(cards=[Card("A", s) for s in Suit], rng=rng)
		card = deck.draw_random()
		counts[card.suit] = counts.get(card.suit, 0) + 1
	for suit in Suit:
		assert 850 < counts[suit] < 1150


def test_shuffle_keeps_membership():
	deck = Deck.standard_52(seed=5)
	before = sorted(deck.cards, key=lambda c: (c.suit.name, c.rank))
	deck.shuffle()
	after = sorted(deck.cards, key=lambda c: (c.suit.name, c.rank))
	assert before == after
	assert deck.size() == 52


def test_added_cards_go_to_the_end():
	deck = Deck.standard_52(seed=0)
	card = Card("5", Suit.CLUBS)
	deck.remove_card(card)
	deck.add_card(card)
	assert deck.cards[-1] == card


@pytest.mark.parametrize("rank,suit", [("11", Suit.HEARTS), ("q", Suit.HEARTS), ("Z", Suit.SPADES),
									   ("7", "HEARTS"), ("7", None)])
def test_card_outside_the_52_rejected(rank, suit):
	with pytest.raises(ValidationError):
		Card(rank, suit)


def test_full_deck_cannot_grow():
	deck = Deck.standard_52(seed=0)
	for card in all_cards():
		assert deck.add_card(card) is False
	assert deck.size() == 52
	assert len(set(deck.cards)) == 52
