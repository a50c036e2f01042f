# tilewar

A two-player turn-based strategy game on a 10×10 board of tiles. Each
player starts with a corner of the board that holds a castle, two barracks
and a few units: swordsmen, archers and horsemen. On their turn a player
selects one of their tiles and picks actions from a menu. They can move or
attack with a whole army, move, attack or shoot with a single unit, put up
a building, or order new units from a castle or barracks. A player wins by
owning both home squares, (2, 2) and (7, 7).

The package also has a small networking layer. It defines a binary message
format with length-prefixed frames, a lobby server that pairs players into
game sessions, and a chat client that sends text through the server.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Playing from Python

The game logic does not depend on any display. You play by pressing tiles
and the buttons in the action panel:

```python
from tilewar.game import Game

game = Game()
tile = game.board.tile(3, 4)        # a tile of the first player, with two swordsmen
game.press_tile(tile)               # select it; a menu of buttons opens
for button in game.action_field.buttons:
    print(button.text, button.action.name)

game.press_button(game.action_field.buttons[0])
```

Pressing the "next turn" button on the base menu ends the turn. Every tile
then ticks: buildings advance unit production and armies can act again.
After a winning move, `game.winner` holds the winning `Player` and
`game.result_message` holds the victory text.

Modules:

- `tilewar.game`: `Game` and `MapState`, the turn logic, menus and combat.
- `tilewar.board` and `tilewar.tile`: `Board` and `Tile`, the playing field.
- `tilewar.units`: `Unit`, `Archer`, `Swordsman`, `Horseman` and `UnitType`.
- `tilewar.army`: `Army`, the units that stand on one tile.
- `tilewar.buildings`: `Castle`, `Barracks`, `Mine`, `Fort`, `BuildingType` and `create_building`.
- `tilewar.unitfactory`: `UnitFactory`, which builds an ordered unit over several ticks, and `create_unit`.
- `tilewar.actionfield`: `ActionField` and `Button`, the stack of action menus.
- `tilewar.action`: `Action` and `action_title`.
- `tilewar.database`: `Database`, which looks up game objects by id.
- `tilewar.player`: `Player` and `Fraction`.
- `tilewar.land`: `Land`, a terrain kind with single-byte bonuses.
- `tilewar.protocol`: `NetworkPackage`, `TextMessage`, `GameDataMessage`, `ErrorMessage`, with `to_bytes` and `from_bytes`.
- `tilewar.framing`: `encode_frame` and `FrameReader`, for frames with a 2- or 8-byte length prefix.
- `tilewar.session`: `GameSession` and `GameStatus`, a server-side game that passes turns between players and relays chat.
- `tilewar.server`: `LobbyServer`.
- `tilewar.chat`: `ChatClient`.

## Running the server and chat client

Start a lobby server on a port. As soon as two players are connected it
puts them together in a game session, tells one "Your turn" and the other
"Waiting for":

```
tilewar-server 5555
```

Connect a chat client in another terminal. Each line you type is sent to
every player in your game, and each received message is printed:

```
tilewar-chat 5555
```

The server takes `--host` (default `0.0.0.0`) and the client takes `--host`
(default `127.0.0.1`). Run either command with `--help` to list its options.

## What it does not do

- There is no graphical interface. Tiles and units carry image file names,
  but no images come with the package and nothing is drawn. You play
  through the `Game` object from Python.
- Network sessions do not run the board game. A `GameSession` only passes
  the turn from one player to the next and relays broadcast chat lines.
  `GameDataMessage` and `ErrorMessage` carry nothing beyond a defined flag.
- A running session never reaches `GameStatus.END` by itself.