from models.note_board import NoteBoard

def tool_route_chat(board: NoteBoard, stream):
    """
    Input:  stream of RouteNote
    Output: for each note, every note stored at its location (itself included),
            oldest first. The outbound side is left for the transport to close.
    """
    for note in stream:
        board.post(note, stream.send)
