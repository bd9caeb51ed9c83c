# ABOUTME: Tests for hook collection and halting hook chains
# ABOUTME: Validates definition order, inheritance and override semantics

from active_presenter.presenter.callbacks import HookStage, after_save, before_save, collect_hooks, run_hook_chain


class Base:
    def __init__(self):
        self.calls = []

    @before_save
    def first(self):
        self.calls.append("first")

    @before_save
    def second(self):
        self.calls.append("second")

    @after_save
    def notify(self):
        self.calls.append("notify")


class Child(Base):
    @before_save
    def third(self):
        self.calls.append("third")

    def second(self):
        self.calls.append("plain second")


class Halting(Base):
    @before_save
    def first(self):
        self.calls.append("halting first")
        return False


def test_hooks_collected_base_first():
    hooks = collect_hooks(Base)

    assert hooks[HookStage.BEFORE_SAVE] == ("first", "second")
    assert hooks[HookStage.AFTER_SAVE] == ("notify",)
    assert hooks[HookStage.BEFORE_VALIDATION] == ()


def test_overriding_without_decorator_removes_hook():
    assert collect_hooks(Child)[HookStage.BEFORE_SAVE] == ("first", "third")


def test_chain_runs_every_hook():
    instance = Base()

    assert run_hook_chain(instance, collect_hooks(Base)[HookStage.BEFORE_SAVE]) is True
    assert instance.calls == ["first", "second"]


def test_false_halts_the_chain():
    instance = Halting()

    assert run_hook_chain(instance, collect_hooks(Halting)[HookStage.BEFORE_SAVE]) is False
    assert instance.calls == ["halting first"]
