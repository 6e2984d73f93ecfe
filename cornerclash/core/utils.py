def print_info(depth, score, nodes, elapsed, best_move):
        move_str = best_move.uci() if best_move else "-"
        nps = int(nodes / elapsed) if elapsed > 0 else 0

        print(f"info depth {depth} score {score} nodes {nodes} nps {nps} time {int(elapsed * 1000)} move {move_str}")
