"""
Tests for overlay_registry module.
"""

import threading

import pytest

from ..overlay_registry import ComparisonMode, OverlayImage, OverlayRegistry


@pytest.fixture
def registry():
    return OverlayRegistry()


@pytest.fixture
def populated_registry(registry):
    for image_id in ['a', 'b', 'c']:
        registry.add_image(OverlayImage(id=image_id))
    return registry


def ids(registry):
    return [image.id for image in registry.images]


class TestOverlayImage:
    """Test the image record."""

    def test_defaults(self):
        image = OverlayImage(id='x')

        assert image.visible is True
        assert image.opacity == 100
        assert image.color_filter is None

    def test_empty_color_filter_normalized(self):
        assert OverlayImage(id='x', color_filter='').color_filter is None

    def test_display_name_fallback(self):
        assert OverlayImage(id='x', description='Before', image_type='ceph').display_name == 'Before'
        assert OverlayImage(id='x', image_type='ceph').display_name == 'ceph'
        assert OverlayImage(id='x').display_name == 'x'

    def test_from_dict_accepts_camel_case(self):
        image = OverlayImage.from_dict({
            'id': 'ceph-after',
            'imageType': 'ceph',
            'patientId': 'p1',
            'colorFilter': 'hue-rotate(180deg)',
        })

        assert image.image_type == 'ceph'
        assert image.patient_id == 'p1'
        assert image.color_filter == 'hue-rotate(180deg)'

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(TypeError):
            OverlayImage.from_dict({'id': 'x', 'bogus': 1})


class TestAddImage:
    """Test adding images."""

    def test_first_image_becomes_active(self, registry):
        assert registry.add_image(OverlayImage(id='a'))

        assert ids(registry) == ['a']
        assert registry.active_image_id == 'a'

    def test_later_images_do_not_change_active(self, registry):
        registry.add_image(OverlayImage(id='a'))
        registry.add_image(OverlayImage(id='b'))

        assert ids(registry) == ['a', 'b']
        assert registry.active_image_id == 'a'

    def test_duplicate_add_is_noop(self, registry):
        registry.add_image(OverlayImage(id='a', opacity=80))

        assert not registry.add_image(OverlayImage(id='a', opacity=30))
        assert len(registry) == 1
        assert registry.get_image('a').opacity == 80

    def test_distinct_ids_keep_first_insertion_order(self, registry):
        for image_id in ['c', 'a', 'c', 'b', 'a']:
            registry.add_image(OverlayImage(id=image_id))

        assert ids(registry) == ['c', 'a', 'b']

    def test_first_add_after_emptying_reactivates(self, registry):
        registry.add_image(OverlayImage(id='a'))
        registry.remove_image('a')
        registry.add_image(OverlayImage(id='b'))

        assert registry.active_image_id == 'b'

    def test_registry_stores_a_copy(self, registry):
        image = OverlayImage(id='a')
        registry.add_image(image)
        image.opacity = 5

        assert registry.get_image('a').opacity == 100

    def test_add_emits_signals(self, registry):
        added, activated = [], []
        registry.image_added.connect(lambda image_id: added.append(image_id))
        registry.active_image_changed.connect(lambda image_id: activated.append(image_id))

        registry.add_image(OverlayImage(id='a'))
        registry.add_image(OverlayImage(id='b'))
        registry.add_image(OverlayImage(id='a'))

        assert added == ['a', 'b']
        assert activated == ['a']


class TestRemoveImage:
    """Test removing images."""

    def test_scenario_remove_until_empty(self, registry):
        registry.add_image(OverlayImage(id='a'))
        registry.add_image(OverlayImage(id='b'))
        assert ids(registry) == ['a', 'b']
        assert registry.active_image_id == 'a'

        registry.remove_image('a')
        assert ids(registry) == ['b']
        assert registry.active_image_id == 'b'

        registry.remove_image('b')
        assert ids(registry) == []
        assert registry.active_image_id is None

    def test_removing_active_picks_first_remaining(self, populated_registry):
        populated_registry.set_active_image('b')

        populated_registry.remove_image('b')

        assert ids(populated_registry) == ['a', 'c']
        assert populated_registry.active_image_id == 'a'

    def test_removing_inactive_keeps_active(self, populated_registry):
        populated_registry.set_active_image('c')

        populated_registry.remove_image('a')

        assert ids(populated_registry) == ['b', 'c']
        assert populated_registry.active_image_id == 'c'

    def test_remove_unknown_is_noop(self, populated_registry):
        before = populated_registry.get_state()

        assert not populated_registry.remove_image('missing')
        assert populated_registry.get_state() == before

    def test_remove_emits_active_change(self, populated_registry):
        removed, activated = [], []
        populated_registry.image_removed.connect(lambda image_id: removed.append(image_id))
        populated_registry.active_image_changed.connect(lambda image_id: activated.append(image_id))

        populated_registry.remove_image('a')
        populated_registry.remove_image('c')
        populated_registry.remove_image('b')

        assert removed == ['a', 'c', 'b']
        assert activated == ['b', None]

    def test_clear_images(self, populated_registry):
        populated_registry.toggle_mode()

        populated_registry.clear_images()

        assert len(populated_registry) == 0
        assert populated_registry.active_image_id is None
        assert populated_registry.mode is ComparisonMode.SIDE_BY_SIDE


class TestImageControls:
    """Test per-image visibility, opacity and color filter."""

    def test_opacity_keeps_visibility(self, registry):
        registry.add_image(OverlayImage(id='x', visible=True, opacity=1))

        registry.set_image_opacity('x', 0.5)

        image = registry.get_image('x')
        assert image.opacity == 0.5
        assert image.visible is True

    def test_opacity_is_not_clamped(self, registry):
        registry.add_image(OverlayImage(id='x'))

        registry.set_image_opacity('x', 250)

        assert registry.get_image('x').opacity == 250

    def test_updates_are_isolated(self, populated_registry):
        before = {image.id: image for image in populated_registry.images}

        populated_registry.set_image_visibility('b', False)
        populated_registry.set_image_opacity('b', 10)
        populated_registry.set_image_color_filter('b', 'sepia(1)')

        after = {image.id: image for image in populated_registry.images}
        assert after['a'] == before['a']
        assert after['c'] == before['c']
        assert after['b'].visible is False
        assert after['b'].opacity == 10
        assert after['b'].color_filter == 'sepia(1)'
        assert populated_registry.active_image_id == 'a'

    def test_empty_color_filter_clears(self, registry):
        registry.add_image(OverlayImage(id='x'))
        registry.set_image_color_filter('x', 'sepia')

        registry.set_image_color_filter('x', '')

        assert registry.get_image('x').color_filter is None

    def test_none_color_filter_clears(self, registry):
        registry.add_image(OverlayImage(id='x', color_filter='sepia'))

        registry.set_image_color_filter('x', None)

        assert registry.get_image('x').color_filter is None

    def test_toggle_visibility(self, registry):
        registry.add_image(OverlayImage(id='x'))

        registry.toggle_image_visibility('x')
        assert registry.get_image('x').visible is False
        registry.toggle_image_visibility('x')
        assert registry.get_image('x').visible is True

    def test_unknown_id_is_noop(self, populated_registry):
        before = populated_registry.get_state()
        changed = []
        populated_registry.image_changed.connect(lambda image_id: changed.append(image_id))

        assert not populated_registry.set_image_visibility('missing', False)
        assert not populated_registry.set_image_opacity('missing', 0)
        assert not populated_registry.set_image_color_filter('missing', 'sepia')
        assert not populated_registry.toggle_image_visibility('missing')

        assert populated_registry.get_state() == before
        assert changed == []

    def test_returned_images_are_copies(self, registry):
        registry.add_image(OverlayImage(id='x'))

        registry.images[0].visible = False
        registry.get_image('x').opacity = 1

        image = registry.get_image('x')
        assert image.visible is True
        assert image.opacity == 100

    def test_visible_images(self, populated_registry):
        populated_registry.set_image_visibility('b', False)

        assert [image.id for image in populated_registry.visible_images()] == ['a', 'c']


class TestActiveImage:
    """Test explicit activation."""

    def test_set_active_image(self, populated_registry):
        assert populated_registry.set_active_image('c')
        assert populated_registry.active_image_id == 'c'
        assert populated_registry.active_image.id == 'c'

    def test_unknown_id_is_rejected(self, populated_registry):
        errors = []
        populated_registry.errorOccurred.connect(lambda message: errors.append(message))

        assert not populated_registry.set_active_image('missing')

        assert populated_registry.active_image_id == 'a'
        assert len(errors) == 1
        assert 'missing' in errors[0]

    def test_none_only_allowed_when_empty(self, registry):
        assert registry.set_active_image(None)

        registry.add_image(OverlayImage(id='a'))
        assert not registry.set_active_image(None)
        assert registry.active_image_id == 'a'

    def test_active_image_none_when_empty(self, registry):
        assert registry.active_image is None


class TestComparisonToggles:
    """Test mode and comparison toggles."""

    def test_defaults(self, registry):
        assert registry.mode is ComparisonMode.OVERLAY
        assert registry.active is False

    def test_toggle_mode_is_involution(self, populated_registry):
        images_before = populated_registry.images

        assert populated_registry.toggle_mode() is ComparisonMode.SIDE_BY_SIDE
        assert populated_registry.toggle_mode() is ComparisonMode.OVERLAY

        assert populated_registry.images == images_before
        assert populated_registry.active_image_id == 'a'
        assert populated_registry.active is False

    def test_toggle_active_is_involution(self, populated_registry):
        assert populated_registry.toggle_active() is True
        assert populated_registry.toggle_active() is False

        assert populated_registry.mode is ComparisonMode.OVERLAY
        assert populated_registry.active_image_id == 'a'

    def test_toggle_signals(self, registry):
        modes, toggles = [], []
        registry.mode_changed.connect(lambda mode: modes.append(mode))
        registry.comparison_toggled.connect(lambda active: toggles.append(active))

        registry.toggle_mode()
        registry.toggle_active()

        assert modes == ['sideBySide']
        assert toggles == [True]


class TestQueries:
    """Test read-only helpers."""

    def test_contains(self, populated_registry):
        assert 'a' in populated_registry
        assert 'z' not in populated_registry

    def test_available_images(self, populated_registry):
        catalog = [OverlayImage(id='a'), OverlayImage(id='d'), OverlayImage(id='e')]

        assert [image.id for image in populated_registry.available_images(catalog)] == ['d', 'e']

    def test_get_state(self, registry):
        registry.add_image(OverlayImage(id='a', color_filter='sepia'))

        state = registry.get_state()

        assert state['active_image_id'] == 'a'
        assert state['mode'] == 'overlay'
        assert state['active'] is False
        assert state['images'][0]['id'] == 'a'
        assert state['images'][0]['color_filter'] == 'sepia'

    def test_statistics(self, populated_registry):
        populated_registry.set_image_visibility('a', False)
        populated_registry.set_image_color_filter('c', 'sepia')

        stats = populated_registry.get_statistics()

        assert stats['total'] == 3
        assert stats['visible'] == 2
        assert stats['filtered'] == 1


class TestConcurrentMutation:
    """Test that concurrent writers cannot break the invariants."""

    def test_concurrent_removes_keep_active_valid(self, registry):
        for i in range(200):
            registry.add_image(OverlayImage(id=f'img-{i}'))

        def remove_range(start):
            for i in range(start, 150, 3):
                registry.remove_image(f'img-{i}')

        threads = [threading.Thread(target=remove_range, args=(start,)) for start in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 50
        assert ids(registry) == [f'img-{i}' for i in range(150, 200)]
        assert registry.active_image_id == 'img-150'


class TestSignalEmission:
    """Test that signals fire after the registry lock is released."""

    def test_toggle_visibility_slot_can_write_from_another_thread(self, registry):
        registry.add_image(OverlayImage(id='a'))
        finished = []

        def write_from_worker(image_id):
            worker = threading.Thread(
                target=lambda: finished.append(registry.set_image_opacity('a', 40)),
                daemon=True
            )
            worker.start()
            worker.join(timeout=2)

        registry.image_changed.connect(write_from_worker)

        registry.toggle_image_visibility('a')

        assert finished == [True]
        image = registry.get_image('a')
        assert image.visible is False
        assert image.opacity == 40

    def test_state_payload_counts(self, registry):
        payloads = []
        registry.stateChanged.connect(lambda state: payloads.append(state))

        registry.add_image(OverlayImage(id='a'))
        registry.add_image(OverlayImage(id='b'))
        registry.remove_image('a')

        counts = [state['images'] for state in payloads if 'images' in state]
        assert counts == [1, 2, 1]
