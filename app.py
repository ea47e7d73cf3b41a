"""
Card Draw Web App
Streamlit interface for the card draw betting game.
"""

import streamlit as st
import pandas as pd

from carddraw.engine.choice import Category, make_choice, choice_options
from carddraw.engine.deck import Card, Suit, Colour, RANKS
from carddraw.engine.errors import CardDrawError
from carddraw.engine.game import GameSession, Phase
from carddraw.engine.notify import ResultSound
from carddraw.logging_utils import setup_logging, get_logger
from carddraw.presets import PRESETS
from carddraw.simulator import Simulator

setup_logging()
logger = get_logger("carddraw.app")

# Page config
st.set_page_config(
    page_title="Card Draw",
    page_icon="🃏",
    layout="wide"
)

st.title("🃏 Card Draw")
st.markdown("*Bet on a card, draw from the deck, win if any of your last 3 draws hits*")


# One game session per browser session
if "game" not in st.session_state:
    st.session_state.game = GameSession()
game: GameSession = st.session_state.game

# Messages queued before a rerun
if "flash" in st.session_state:
    st.toast(st.session_state.pop("flash"))


def card_html(card, size: int = 96) -> str:
    if card is None:
        return f"<div style='font-size:{size}px;color:#888;'>🂠</div>"
    color = "#d22" if card.colour == Colour.RED else "#eee"
    return f"<div style='font-size:{size}px;font-weight:bold;color:{color};'>{card}</div>"


def run_action(action, *args, success: str = None, no_change: str = None):
    """Call a session method; report errors and no-ops, then rerun."""
    try:
        changed = action(*args)
    except CardDrawError as e:
        st.sidebar.error(str(e))
        return
    if changed and success:
        st.session_state.flash = success
    elif not changed and no_change:
        st.session_state.flash = no_change
    st.rerun()


def choice_picker(key: str):
    """Category + value widgets. Returns (category, value)."""
    category = st.selectbox(
        "Bet on",
        options=list(Category),
        format_func=lambda c: c.value.title(),
        key=f"{key}_category",
    )
    options = choice_options(category)
    value = st.selectbox(
        {Category.INDIVIDUAL: "Card", Category.SUIT: "Suit",
         Category.COLOUR: "Colour", Category.NUMBER: "Rank"}[category],
        options=options,
        format_func=lambda v: v.name if isinstance(v, (Suit, Colour)) else str(v),
        key=f"{key}_value_{category.value}",
    )
    if category == Category.NUMBER:
        st.caption("Rank values: A=1, J=11, K=12, Q=13. Odd and even ranks pay differently.")
    return category, value


# Sidebar: deck editing, multipliers, mode
st.sidebar.header("Deck")
st.sidebar.metric("Cards in deck", game.deck_size())

preset_key = st.sidebar.selectbox(
    "Preset",
    options=list(PRESETS.keys()),
    format_func=lambda k: PRESETS[k].name,
)
st.sidebar.markdown(f"*{PRESETS[preset_key].description}*")
if st.sidebar.button("Apply preset", use_container_width=True):
    try:
        game.apply_preset(PRESETS[preset_key])
    except CardDrawError as e:
        st.sidebar.error(str(e))
    else:
        st.session_state.flash = f"Preset {PRESETS[preset_key].name} applied."
        st.rerun()

with st.sidebar.expander("Suits & colours"):
    suit = st.selectbox("Suit", options=list(Suit), format_func=lambda s: f"{s.glyph} {s.name}")
    col1, col2 = st.columns(2)
    if col1.button("Remove suit"):
        run_action(game.remove_suit, suit, no_change="No cards of that suit.")
    if col2.button("Add suit"):
        run_action(game.add_suit, suit, no_change="Suit already complete.")
    colour = st.selectbox("Colour", options=list(Colour), format_func=lambda c: c.name)
    col1, col2 = st.columns(2)
    if col1.button("Remove colour"):
        run_action(game.remove_colour, colour, no_change="No cards of that colour.")
    if col2.button("Add colour"):
        run_action(game.add_colour, colour, no_change="Colour already complete.")

with st.sidebar.expander("Faces & parity"):
    st.caption("Odd / even uses A=1, J=11, K=12, Q=13")
    col1, col2 = st.columns(2)
    if col1.button("Remove faces"):
        run_action(game.remove_faces)
    if col2.button("Add faces"):
        run_action(game.add_faces)
    if col1.button("Remove odd"):
        run_action(game.remove_odd)
    if col2.button("Add odd"):
        run_action(game.add_odd)
    if col1.button("Remove even"):
        run_action(game.remove_even)
    if col2.button("Add even"):
        run_action(game.add_even)

with st.sidebar.expander("Specific card"):
    col1, col2 = st.columns(2)
    rank = col1.selectbox("Rank", options=RANKS, key="specific_rank")
    suit = col2.selectbox("Suit", options=list(Suit), format_func=lambda s: s.glyph, key="specific_suit")
    specific = Card(rank, suit)
    if col1.button("Remove card"):
        run_action(game.remove_card, specific, success="Card removed.",
                   no_change="That card was not in the deck.")
    if col2.button("Add card"):
        run_action(game.add_card, specific, success="Card added.",
                   no_change="That card already exists in the deck.")

if st.sidebar.button("Reset to full deck", use_container_width=True):
    run_action(game.reset_deck)

st.sidebar.header("Multipliers")
with st.sidebar.form("multipliers"):
    current = game.multipliers
    individual = st.text_input("Individual card", value=str(current.individual))
    suit_mul = st.text_input("Suit", value=str(current.suit))
    colour_mul = st.text_input("Colour", value=str(current.colour))
    odd_mul = st.text_input("Number (odd)", value=str(current.number_odd))
    even_mul = st.text_input("Number (even)", value=str(current.number_even))
    if st.form_submit_button("Apply multipliers"):
        try:
            game.set_multipliers(individual, suit_mul, colour_mul, odd_mul, even_mul)
            st.success("Multipliers updated successfully.")
        except CardDrawError as e:
            st.error(str(e))

mode = st.sidebar.radio("Mode", ["Play", "Simulate"])

st.divider()


def show_setup():
    st.subheader("Place your bet")
    bet_text = st.text_input("Bet (integer)", value="10")
    category, value = choice_picker("setup")
    col1, col2 = st.columns(2)
    if col1.button("Reset", use_container_width=True):
        game.restart()
        st.rerun()
    if col2.button("Next", type="primary", use_container_width=True):
        try:
            game.configure_round(bet_text, make_choice(category, value))
        except CardDrawError as e:
            st.error(str(e))
        else:
            st.rerun()


def show_probability():
    breakdown = game.probability_breakdown()
    st.markdown(f"**Chosen:** {breakdown.choice.summary()}")
    for i, line in enumerate(breakdown.details, start=1):
        st.markdown(f"{i}. {line}")
    if not breakdown.undefined:
        st.caption(breakdown.note())
        st.caption(
            f"Quick payout expectation: **{breakdown.quick_expected_payout:.2f}** (not net). "
            f"Expected net value: EV = p × payout − (1 − p) × bet = **{breakdown.expected_net:+.2f}**"
        )


def show_play():
    bet = game.bet
    st.markdown(f"**Bet:** ${bet.amount} &nbsp;|&nbsp; **Choice:** {bet.choice.summary()} "
                f"&nbsp;|&nbsp; **Deck size:** {game.deck_size()} "
                f"&nbsp;|&nbsp; **Multiplier:** ×{game.current_multiplier():.2f}")

    left, center, right = st.columns([1, 2, 2])

    with left:
        st.subheader("Remaining")
        if game.deck_size():
            st.dataframe(
                pd.DataFrame({"Card": [str(c) for c in game.deck_contents()]}),
                hide_index=True,
                use_container_width=True,
                height=420,
            )
        else:
            st.markdown("*Deck is empty*")

    with center:
        st.markdown(card_html(game.last_drawn, size=140), unsafe_allow_html=True)
        if game.history:
            st.caption("Drawn: " + ", ".join(str(c) for c in game.history))
        col1, col2, col3 = st.columns(3)
        if col1.button("Draw", type="primary", disabled=not game.can_draw(), use_container_width=True):
            if game.draw() is None:
                st.warning("Deck is empty. Reset or add cards.")
            st.rerun()
        if col2.button("Shuffle", use_container_width=True):
            game.shuffle()
            st.rerun()
        if col3.button("End round", use_container_width=True):
            game.end_round()
            st.session_state.play_sound = True
            st.rerun()
        if not game.can_draw():
            st.warning("Deck is empty. Reset or add cards.")

    with right:
        st.subheader("Probability")
        show_probability()


def show_result():
    result = game.last_result
    outcome = result.outcome

    if result.won:
        st.success("🏆 YOU WON!")
    else:
        st.error("💀 YOU LOST")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Bet", f"${result.bet.amount}")
    with col2:
        st.metric("Multiplier", f"×{result.multiplier:.2f}")
    with col3:
        st.metric("Potential payout", f"${result.potential_payout:.2f}")
    with col4:
        st.metric("Return" if result.net >= 0 else "Lost", f"${abs(result.net)}")

    left, right = st.columns([1, 2])
    with left:
        st.markdown(card_html(outcome.display_card, size=160), unsafe_allow_html=True)
    with right:
        st.markdown(f"**Your bet:** {result.bet}")
        st.markdown(f"**Displayed card:** {outcome.display_card if outcome.display_card else 'None'}")
        st.caption(outcome.describe_window())
        if outcome.hits:
            st.markdown(f"**Hit(s) among last {len(outcome.window)}:** "
                        f"{', '.join(str(c) for c in outcome.hits)}")

        col1, col2 = st.columns(2)
        if col1.button("Restart game", use_container_width=True):
            game.restart()
            st.rerun()
        if col2.button("Play again (keep deck & choice)", type="primary", use_container_width=True):
            game.play_again()
            st.rerun()

    # Sound is optional; a missing or broken file never blocks the result.
    # Played once, on the rerun right after the round ends.
    if st.session_state.pop("play_sound", False):
        try:
            sound = ResultSound(game.config.sound_dir).path_for(result.won)
            if sound is not None:
                st.audio(str(sound), autoplay=True)
        except Exception:
            logger.warning("Could not play result sound", exc_info=True)

    # Session timeline
    results = game.log.get_results()
    if results:
        st.subheader("📜 Session Timeline")
        for event in results:
            icon = "✅" if event.data["won"] else "❌"
            net = event.data["net"]
            with st.expander(f"{icon} Round {event.round_number}: {'+' if net >= 0 else '-'}${abs(net)}"):
                st.write(f"**Displayed card:** {event.data['display_card'] or 'None'}")
                st.write(f"**Window:** {', '.join(event.data['window']) or 'No cards drawn'}")
                if event.data["hits"]:
                    st.write(f"**Hits:** {', '.join(event.data['hits'])}")
        summary = game.log.to_dict()["summary"]
        st.caption(f"{summary['rounds_won']}/{summary['rounds_played']} rounds won, "
                   f"net ${summary['net_total']:+,}")


def show_simulator():
    st.subheader("🎲 Simulate rounds")
    st.markdown("*Monte Carlo check of the odds shown in the probability tab*")
    category, value = choice_picker("sim")
    col1, col2, col3 = st.columns(3)
    with col1:
        bet = st.number_input("Bet", min_value=1, value=10, step=1)
    with col2:
        draws = st.slider("Draws per round", min_value=1, max_value=10, value=1)
    with col3:
        rounds = st.slider("Number of rounds", min_value=100, max_value=5000, value=1000, step=100)
    sim_preset = st.selectbox("Deck preset", options=list(PRESETS.keys()),
                              format_func=lambda k: PRESETS[k].name, key="sim_preset")

    if st.button("🎲 Run Simulation", type="primary", use_container_width=True):
        sim = Simulator(multipliers=game.multipliers)
        with st.spinner("Running simulation..."):
            result = sim.run_batch(make_choice(category, value), bet=int(bet), draws=draws,
                                   rounds=rounds, preset=sim_preset)

        if result.avg_net > 0:
            st.success(f"Win rate: {result.wins}/{result.rounds} ({result.win_rate:.1f}%)")
        elif result.wins:
            st.warning(f"Win rate: {result.wins}/{result.rounds} ({result.win_rate:.1f}%)")
        else:
            st.error(f"Win rate: {result.wins}/{result.rounds} ({result.win_rate:.1f}%)")

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Expected win rate", f"{result.expected_win_rate:.1f}%")
        with col2:
            st.metric("Total net", f"${result.total_net:+,}")
        with col3:
            st.metric("Avg net / round", f"${result.avg_net:+.2f}")

        st.subheader("Hits in window")
        chart_data = pd.DataFrame({
            'Hits': list(result.hit_distribution.keys()),
            'Rounds': list(result.hit_distribution.values())
        }).sort_values('Hits')
        st.bar_chart(chart_data.set_index('Hits'))


if mode == "Simulate":
    show_simulator()
elif game.phase == Phase.SETUP:
    show_setup()
elif game.phase == Phase.PLAY:
    show_play()
else:
    show_result()

# Footer
st.divider()
st.markdown("*Built with the Card Draw engine*")
