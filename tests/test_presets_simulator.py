# Presets and the batch simulator

import pytest

from carddraw.engine.choice import MultiplierTable, ColourChoice, SuitChoice, NumberChoice
from carddraw.engine.deck import Colour, Suit
from carddraw.engine.errors import ValidationError
from carddraw.presets import PRESETS, get_preset, list_presets, get_preset_info
from carddraw.simulator import Simulator


def test_preset_lookup_normalises_names():
	assert get_preset("No Faces") is PRESETS["no_faces"]
	assert get_preset("REDS_ONLY") is PRESETS["reds_only"]
	assert get_preset("jokers") is None
	assert "standard" in list_presets()


def test_preset_info():
	info = get_preset_info("hearts_and_spades")
	assert info["deck_edits"] == ["remove_suit DIAMONDS", "remove_suit CLUBS"]
	assert info["multipliers"]["suit"] == 1.9
	assert get_preset_info("nope") is None


@pytest.mark.parametrize("name,size", [
	("standard", 52),
	("no_faces", 40),
	("reds_only", 26),
	("hearts_and_spades", 26),
	("odd_only", 28),
	("even_only", 24),
	("high_roller", 52),
])
def test_preset_deck_sizes(name, size):
	session = Simulator(multipliers=MultiplierTable(), seed=0).new_session(name)
	assert session.deck_size() == size


def test_unknown_preset_rejected():
	sim = Simulator(seed=0)
	with pytest.raises(ValidationError):
		sim.new_session("jokers_wild")
	with pytest.raises(ValidationError):
		sim.run_batch(SuitChoice(Suit.HEARTS), rounds=5, preset="jokers_wild")


def test_sure_thing_on_reds_only():
	sim = Simulator(multipliers=MultiplierTable(), seed=3)
	result = sim.run(ColourChoice(Colour.RED), bet=10, draws=1, preset="reds_only")
	assert result.won
	assert result.multiplier == 1.0
	assert result.net == 10


def test_run_stops_on_empty_deck():
	sim = Simulator(multipliers=MultiplierTable(), seed=3)
	result = sim.run(ColourChoice(Colour.RED), draws=60, preset="reds_only")
	assert len(result.outcome.window) == 3
	assert result.won
	assert len(result.outcome.hits) == 3


def test_batch_win_rate_tracks_expected():
	sim = Simulator(multipliers=MultiplierTable(), seed=2024)
	batch = sim.run_batch(SuitChoice(Suit.HEARTS), bet=10, draws=3, rounds=2000)
	assert batch.rounds == 2000
	assert sum(batch.hit_distribution.values()) == 2000
	assert batch.expected_win_rate == pytest.approx(100 * (1 - (39 * 38 * 37) / (52 * 51 * 50)))
	assert abs(batch.win_rate - batch.expected_win_rate) < 5
	assert batch.preset_used == "Standard"
	assert "BATCH RESULTS" in str(batch)


def test_batch_is_reproducible_with_seed():
	a = Simulator(multipliers=MultiplierTable(), seed=9).run_batch(NumberChoice("Q"), rounds=200, draws=2)
	b = Simulator(multipliers=MultiplierTable(), seed=9).run_batch(NumberChoice("Q"), rounds=200, draws=2)
	assert a.to_dict() == b.to_dict()
