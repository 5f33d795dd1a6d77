"""
Custom UI Controls for the Water Ripple Viewer

Minimal, translucent widgets drawn directly with pygame. The panel floats
over the water like page content over the web background, so every widget
reports a click Target: buttons are BUTTON, sliders are INPUT (a range
input), and bare panel area is a plain DIV that lets the splash through.
"""

import pygame

from .scheduler import Target


THEME = {
    "bg": (10, 24, 40),
    "panel": (12, 28, 48, 200),
    "track": (50, 70, 95),
    "track_fill": (90, 190, 235),
    "handle": (210, 230, 245),
    "text": (190, 210, 225),
    "text_bright": (235, 245, 255),
    "text_dim": (120, 145, 170),
    "button": (30, 55, 85),
    "button_active": (40, 140, 200),
    "divider": (45, 70, 100),
}

HEADER_HEIGHT = 24


class Slider:
    """Range input. A press anywhere on it grabs the handle."""

    def __init__(self, x, y, width, label, min_val, max_val, value,
                 fmt=".3f", step=None, on_change=None, parent=None):
        self.rect = pygame.Rect(x, y, width, 36)
        self.label = label
        self.min_val = min_val
        self.max_val = max_val
        self.value = value
        self.fmt = fmt
        self.step = step
        self.on_change = on_change
        self.dragging = False
        self.target = Target("INPUT", parent=parent)

        self.track = pygame.Rect(x + 8, y + 20, width - 16, 4)

    def _val_to_x(self, val):
        frac = (val - self.min_val) / (self.max_val - self.min_val)
        return self.track.x + frac * self.track.width

    def _x_to_val(self, px):
        frac = max(0, min(1, (px - self.track.x) / self.track.width))
        val = self.min_val + frac * (self.max_val - self.min_val)
        if self.step:
            val = round(val / self.step) * self.step
        return val

    def _drag_to(self, px):
        self.value = self._x_to_val(px)
        if self.on_change:
            self.on_change(self.value)

    def element_at(self, pos):
        return self.target if self.rect.collidepoint(pos) else None

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.dragging = True
                self._drag_to(event.pos[0])
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self._drag_to(event.pos[0])
            return True
        return False

    def set_value(self, val):
        self.value = max(self.min_val, min(self.max_val, val))

    def draw(self, surface, font):
        surface.blit(font.render(self.label, True, THEME["text"]),
                     (self.rect.x + 8, self.rect.y + 2))
        val_surf = font.render(f"{self.value:{self.fmt}}", True, THEME["text_bright"])
        surface.blit(val_surf, (self.rect.right - val_surf.get_width() - 8, self.rect.y + 2))

        hx = self._val_to_x(self.value)
        pygame.draw.rect(surface, THEME["track"], self.track, border_radius=2)
        filled = self.track.copy()
        filled.width = int(hx - self.track.x)
        pygame.draw.rect(surface, THEME["track_fill"], filled, border_radius=2)
        pygame.draw.circle(surface, THEME["handle"], (int(hx), self.track.centery),
                           9 if self.dragging else 7)


class Button:
    """Clickable button. Toggle buttons light up while active."""

    def __init__(self, x, y, width, height, label, on_click=None, active=False,
                 parent=None):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.on_click = on_click
        self.active = active
        self.target = Target("BUTTON", parent=parent)

    def element_at(self, pos):
        return self.target if self.rect.collidepoint(pos) else None

    def handle_event(self, event):
        if (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                and self.rect.collidepoint(event.pos)):
            if self.on_click:
                self.on_click()
            return True
        return False

    def draw(self, surface, font):
        color = THEME["button_active"] if self.active else THEME["button"]
        pygame.draw.rect(surface, color, self.rect, border_radius=4)
        label_surf = font.render(self.label, True, THEME["text_bright"])
        surface.blit(label_surf, label_surf.get_rect(center=self.rect.center))


class ButtonRow:
    """Radio group of buttons wrapped to the panel width. Used for presets."""

    def __init__(self, x, y, width, labels, selected=0, on_select=None,
                 btn_height=24, parent=None):
        self.selected = selected
        self.on_select = on_select
        self.buttons = []

        bx, by = x, y
        for i, label in enumerate(labels):
            bw = max(len(label) * 7 + 14, 44)
            if bx + bw > x + width and bx > x:
                bx, by = x, by + btn_height + 4
            self.buttons.append(Button(bx, by, bw, btn_height, label,
                                       on_click=lambda i=i: self.select(i),
                                       parent=parent))
            bx += bw + 4

        self.total_height = by - y + btn_height
        self.set_selected(selected)

    def set_selected(self, idx):
        self.selected = idx
        for i, btn in enumerate(self.buttons):
            btn.active = (i == idx)

    def select(self, idx):
        self.set_selected(idx)
        if self.on_select:
            self.on_select(idx)

    def element_at(self, pos):
        for btn in self.buttons:
            if btn.element_at(pos) is not None:
                return btn.target
        return None

    def handle_event(self, event):
        return any(btn.handle_event(event) for btn in self.buttons)

    def draw(self, surface, font):
        for btn in self.buttons:
            btn.draw(surface, font)


class ControlPanel:
    """
    Floating panel over the canvas.

    Widgets are laid out top to bottom in panel-local coordinates. Section
    titles are decoration only; clicks on them land on the panel body.
    """

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self.headers = []       # (y, title)
        self.target = Target("DIV")
        self._cursor_y = 8

    def add_section(self, title):
        self.headers.append((self._cursor_y, title))
        self._cursor_y += HEADER_HEIGHT + 4

    def add_slider(self, label, min_val, max_val, value, fmt=".3f",
                   step=None, on_change=None):
        slider = Slider(0, self._cursor_y, self.width, label,
                        min_val, max_val, value, fmt, step, on_change,
                        parent=self.target)
        self.widgets.append(slider)
        self._cursor_y += slider.rect.height + 6
        return slider

    def add_button_row(self, labels, selected=0, on_select=None):
        row = ButtonRow(8, self._cursor_y, self.width - 16, labels,
                        selected, on_select, parent=self.target)
        self.widgets.append(row)
        self._cursor_y += row.total_height + 8
        return row

    def add_button(self, label, on_click=None, active=False):
        btn = Button(8, self._cursor_y, self.width - 16, 26, label, on_click,
                     active=active, parent=self.target)
        self.widgets.append(btn)
        self._cursor_y += 32
        return btn

    def fit_height(self):
        self.height = self._cursor_y + 4

    @property
    def rect(self):
        return pygame.Rect(self.x, self.y, self.width, self.height)

    @property
    def dragging(self):
        return any(getattr(w, "dragging", False) for w in self.widgets)

    def to_local(self, pos):
        return (pos[0] - self.x, pos[1] - self.y)

    def element_at(self, pos):
        """Click Target under a window position, or None outside the panel."""
        if not self.rect.collidepoint(pos):
            return None
        local = self.to_local(pos)
        for widget in self.widgets:
            hit = widget.element_at(local)
            if hit is not None:
                return hit
        return self.target

    def handle_event(self, event):
        """Route a mouse event in window coordinates. True if a widget took it."""
        if event.type == pygame.MOUSEBUTTONUP:
            # Release sliders even when the pointer left the panel
            for widget in self.widgets:
                widget.handle_event(pygame.event.Event(
                    event.type, button=event.button, pos=self.to_local(event.pos)))
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and not self.rect.collidepoint(event.pos):
            return False
        if event.type == pygame.MOUSEMOTION and not self.dragging:
            return False

        local = pygame.event.Event(event.type, {**event.__dict__, "pos": self.to_local(event.pos)})
        return any(widget.handle_event(local) for widget in self.widgets)

    def draw(self, target_surface, font):
        surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        pygame.draw.rect(surface, THEME["panel"], surface.get_rect(), border_radius=8)
        for y, title in self.headers:
            pygame.draw.line(surface, THEME["divider"], (8, y + 8), (self.width - 8, y + 8))
            surface.blit(font.render(title, True, THEME["text_dim"]), (8, y + 12))
        for widget in self.widgets:
            widget.draw(surface, font)
        target_surface.blit(surface, (self.x, self.y))
