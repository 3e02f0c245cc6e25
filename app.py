import streamlit as st
from wordscramble.providers import (FileWordSource, OnlineDictionary, OnlineWordSource,
                                    StartWordsMissing, WordListDictionary,
                                    default_start_words_path)
from wordscramble.game import WordScramble

# ---------- App setup ----------
st.set_page_config(page_title="Word Scramble", page_icon="🔤", layout="centered")
st.markdown("Make as many words as you can from the letters of the root word. "
            "Each word scores one point per letter.")

DICTIONARIES = ("Online (dictionaryapi.dev)", "Local word list")
SOURCES = ("Start words file", "Random online words")


def make_dictionary(choice: str):
    if choice == DICTIONARIES[1]:
        return WordListDictionary.from_env()
    return OnlineDictionary(timeout=5)


def make_source(choice: str, dictionary):
    if choice == SOURCES[1]:
        return OnlineWordSource(dictionary)
    return FileWordSource()


def fail(e: FileNotFoundError):
    if isinstance(e, StartWordsMissing):
        st.error(f"{e}. The game can't start without it.")
    else:
        st.error(str(e))
    st.stop()


# ---------- Sidebar controls ----------
with st.sidebar:
    st.header("Game Controls")
    dict_choice = st.radio("Dictionary", DICTIONARIES, key="dictionary_choice")
    source_choice = st.radio("Root words", SOURCES, key="source_choice")
    st.caption(f"Start words: `{default_start_words_path()}`")
    restart = st.button("🔁 Restart game", use_container_width=True)

# ---------- Load engine once ----------
try:
    if "engine" not in st.session_state:
        dictionary = make_dictionary(dict_choice)
        engine = WordScramble(source=make_source(source_choice, dictionary), dictionary=dictionary)
        engine.new_game()
        st.session_state.engine = engine
        st.session_state.dictionary = dict_choice
        st.session_state.source = source_choice

    eng: WordScramble = st.session_state.engine

    # switching dictionaries keeps the current round
    if st.session_state.dictionary != dict_choice:
        old = eng.dictionary
        eng.dictionary = make_dictionary(dict_choice)
        if isinstance(old, OnlineDictionary):
            old.close()
        if isinstance(eng.source, OnlineWordSource):
            eng.source.dictionary = eng.dictionary
        st.session_state.dictionary = dict_choice

    # a new source of root words means a new round
    if st.session_state.source != source_choice:
        eng.source = make_source(source_choice, eng.dictionary)
        st.session_state.source = source_choice
        restart = True

    if restart:
        eng.new_game()
        st.rerun()
except FileNotFoundError as e:
    fail(e)

st.title(eng.root_word)

# ---------- Word input ----------
with st.form("guess", clear_on_submit=True):
    word = st.text_input("Enter your word", key="word")
    submit = st.form_submit_button("Submit", type="primary")

if submit:
    result = eng.guess(word)
    if not result.valid and result.reason is not None:
        st.error(f"**{result.title}**  \n{result.message}")

# ---------- Words ----------
history = eng.history()
if not history:
    st.caption("No words yet.")
else:
    for w in history:
        st.write(f"**{len(w)}** — {w}")

st.divider()
st.subheader(f"Your total score is {eng.score}")
