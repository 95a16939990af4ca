from roomsdemo.events import NavigationEvent
from roomsdemo.player import Player, PlayerMotor, ZoneLayout


def test_spawn_captured_and_restored():
    player = Player(100, 50)
    motor = PlayerMotor(player)
    player.move(30, -10)
    assert player.position == (130, 40)
    motor.reset_position()
    assert player.position == (100, 50)


def test_collision_toggle():
    player = Player(0, 0)
    motor = PlayerMotor(player)
    motor.set_collision_enabled(False)
    assert player.collision_enabled is False
    motor.set_collision_enabled(True)
    assert player.collision_enabled is True


def test_zone_lookup():
    zones = ZoneLayout(width=400, height=300, depth=40)
    assert zones.zone_at(390, 150) is NavigationEvent.FORWARD
    assert zones.zone_at(10, 150) is NavigationEvent.BACKWARD
    assert zones.zone_at(200, 150) is None
    assert zones.zone_at(390, 400) is None


def test_entry_is_edge_triggered():
    zones = ZoneLayout(width=400, height=300, depth=40)
    player = Player(200, 150)
    assert zones.check_entry(player) is None
    player.x = 380
    assert zones.check_entry(player) is NavigationEvent.FORWARD
    player.x = 385
    assert zones.check_entry(player) is None
    player.x = 200
    assert zones.check_entry(player) is None
    player.x = 390
    assert zones.check_entry(player) is NavigationEvent.FORWARD


def test_no_entry_while_collision_disabled():
    zones = ZoneLayout(width=400, height=300, depth=40)
    player = Player(390, 150, collision_enabled=False)
    assert zones.check_entry(player) is None


def test_clamp_keeps_player_inside():
    zones = ZoneLayout(width=400, height=300)
    player = Player(200, 150)
    player.move(1000, -1000)
    zones.clamp(player, margin=16)
    assert player.position == (384, 16)
