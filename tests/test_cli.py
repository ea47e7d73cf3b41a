# Console front-end

from carddraw.cli import main


def test_list_presets(capsys):
	assert main(["--list-presets"]) == 0
	out = capsys.readouterr().out
	assert "no_faces" in out
	assert "high_roller" in out


def test_play_one_round(capsys):
	code = main(["--bet", "10", "--category", "suit", "--value", "hearts", "--draws", "3",
				 "--seed", "5", "--show-probability", "--log-level", "WARNING"])
	assert code == 0
	out = capsys.readouterr().out
	assert "Bet: $10 on Suit HEARTS" in out
	assert "1/4" in out
	assert out.count("Drew ") == 3
	assert "YOU " in out


def test_draws_past_empty_deck(capsys):
	code = main(["--category", "colour", "--value", "red", "--preset", "reds_only",
				 "--draws", "30", "--seed", "1", "--log-level", "WARNING"])
	assert code == 0
	out = capsys.readouterr().out
	assert "Deck is empty" in out
	assert "YOU WON!" in out


def test_bad_bet_returns_error(capsys):
	assert main(["--bet", "-4", "--log-level", "WARNING"]) == 2
	assert "valid positive integer" in capsys.readouterr().err


def test_unknown_preset_returns_error(capsys):
	assert main(["--preset", "jokers", "--log-level", "WARNING"]) == 2
	assert main(["--preset", "jokers", "--simulate", "10"]) == 2


def test_simulate(capsys):
	code = main(["--category", "number", "--value", "7", "--draws", "3", "--simulate", "100",
				 "--seed", "4"])
	assert code == 0
	assert "BATCH RESULTS (100 rounds)" in capsys.readouterr().out
