from cornerclash.config import CONFIG
from cornerclash.core.movegen import has_legal_moves
from cornerclash.core.pieces import Color
from cornerclash.main import Engine


def main(input_fn=input):
    # initialize game and engine
    engine = Engine(depth=CONFIG.search.depth)
    game = engine.game
    human = Color(CONFIG.ui.human_color)
    print(f"{CONFIG.ui.engine_name} by {CONFIG.ui.engine_author}")

    while not game.is_game_over():
        game.print_board()
        print("----------------------------")

        if game.to_move is human:
            if not has_legal_moves(game.board, human):
                print(f"{human.value} has no legal moves.")
                break
            user_move = input_fn(f"Enter your move as {human.value} (e.g. a2a3, 'undo', 'quit'): ").strip()
            if user_move == "quit":
                print("Game abandoned.")
                return
            if user_move == "undo":
                # take back the engine reply and your own move
                game.undo_move()
                game.undo_move()
                continue
            if not game.make_move(user_move):
                print("Illegal move, try again.")
            continue

        played = engine.play_engine_move()
        if played is None:
            print(f"{game.to_move.value} has no legal moves.")
            break
        print(f"Engine plays: {game.move_history[-1].notation()}")

    game.print_board()
    print("Game Over")
    winner = game.winner()
    print(f"Result: {winner.value + ' wins' if winner else 'no winner'}")


if __name__ == "__main__":
    main()
