"""Console UI for spelling safari."""

import requests

from core.config import (
    ADVANCE_ACCURACY_THRESHOLD, DEMOTE_ACCURACY_THRESHOLD, NO_ERRORS_MESSAGE
)
from core.models import (
    IdleState, LoadedState, SubmittedState, Analysis,
    VERDICT_CORRECT, VERDICT_INCORRECT
)
from core.session import GameSession

VERDICT_MARKS = {VERDICT_CORRECT: '+', VERDICT_INCORRECT: 'x'}

HELP = 'Commands: <number> pick a word, "s" submit, "r" regenerate, "q" quit'
SUBMITTED_HELP = 'Commands: "n" next, "m" reveal/hide mistakes, "a" analyze, "q" quit'


class ConsoleUI:
    """Console user interface for spelling safari."""

    def __init__(self, session: GameSession, input_func=input):
        self.session = session
        self.input = input_func

    def format_sentence(self, state) -> str:
        """Number each word and mark the ones already judged."""
        parts = []
        for index, word in enumerate(state.record.words):
            verdict = state.verdict(index)
            mark = VERDICT_MARKS.get(verdict, '')
            parts.append(f'[{index}]{word}{mark}')
        return ' '.join(parts)

    def print_round(self):
        """Print the sentence and score panel for the current round."""
        state = self.session.state
        if isinstance(state, IdleState):
            if state.error:
                print(state.error)
            return
        if not isinstance(state, (LoadedState, SubmittedState)):
            print('Loading sentence...')
            return

        print('\n' + '=' * 60)
        print(f'SPELLING SAFARI ({state.record.difficulty})')
        print('=' * 60)
        print(self.format_sentence(state))
        print('=' * 60)

        if self.session.celebrating():
            print('\n  *  *  *\n')

        score = state.score
        print(f'Sentence accuracy: {self.session.accuracy():.2f}%')
        print(f'Score: {score.correct} correct, {score.incorrect} incorrect')
        print(f'Streak: {score.streak}')
        print(f'User level: {self.session.stats.current_level}')

        if isinstance(state, SubmittedState):
            if state.show_mistakes:
                self.print_mistakes(state)
            if state.show_analysis and state.analysis:
                self.print_analysis(state.analysis)

    def print_mistakes(self, state: SubmittedState):
        print('-' * 40)
        print('Error details')
        for error in state.record.errors:
            print(f'  Error: {error}')
        print('-' * 40)

    def print_analysis(self, analysis: Analysis):
        print('-' * 40)
        print('Improvement suggestions')
        if analysis.message:
            print(f'  {analysis.message}')
        else:
            visible = analysis.visible_suggestions()
            if not visible:
                print(f'  {NO_ERRORS_MESSAGE}')
            for mistake, suggestion in visible.items():
                print(f'  Mistake: {mistake}')
                print(f'    Corrected spelling: {suggestion.corrected_spelling}')
                print(f'    Explanation: {suggestion.explanation}')
                print(f'    Error pattern: {suggestion.error_pattern}')
        print('-' * 40)

    def handle_command(self, command: str) -> bool:
        """Apply one command. Returns False when the player quits."""
        command = command.strip().lower()
        state = self.session.state

        if command == 'q':
            return False
        if command.isdigit():
            self.session.click(int(command))
        elif command == 's':
            self.session.submit()
        elif command == 'r' and not isinstance(state, SubmittedState):
            print('Loading sentence...')
            self.session.regenerate()
        elif command == 'n' and isinstance(state, SubmittedState):
            print('Loading sentence...')
            self.session.next_round()
        elif command == 'm':
            self.session.toggle_mistakes()
        elif command == 'a' and isinstance(state, SubmittedState):
            print('Analyzing...')
            self.session.analyze()
        else:
            print(SUBMITTED_HELP if isinstance(state, SubmittedState) else HELP)
        return True

    def run(self):
        """Run the main game loop."""
        try:
            self.session.provider.health_check()
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.session.provider.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        print('\nWelcome to Spelling Safari: The Great Hunt!')
        print('Find the two misspelled words in each sentence.')
        print(f'Level up: {ADVANCE_ACCURACY_THRESHOLD}%+ accuracy | Level down: below {DEMOTE_ACCURACY_THRESHOLD}%')
        print(HELP + '\n')

        print('Loading sentence...')
        self.session.new_round()
        while True:
            self.print_round()
            state = self.session.state
            print(SUBMITTED_HELP if isinstance(state, SubmittedState) else HELP)
            if not self.handle_command(self.input('==> ')):
                print('Goodbye!')
                return
