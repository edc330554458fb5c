from .state import Position


def render_ascii(pos: Position) -> str:
    """ASCII rendering of the position in the level alphabet."""
    out_lines = []
    for y in range(pos.height):
        row_chars = []
        for x in range(pos.width):
            idx = y * pos.width + x
            if pos.is_wall(idx):
                row_chars.append('#')
                continue
            has_goal = pos.is_goal_cell(idx)
            if idx == pos.player:
                row_chars.append('+' if has_goal else '@')
            elif pos.has_box(idx):
                row_chars.append('*' if has_goal else '$')
            else:
                row_chars.append('.' if has_goal else ' ')
        out_lines.append(''.join(row_chars))
    return "\n".join(out_lines)
