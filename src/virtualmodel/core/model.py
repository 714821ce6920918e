from .mixins import VirtualsMixin
from .record import Record


class Model(VirtualsMixin, Record):
    """
    Base class for records with virtual properties.

    Example:
        class Person(Model):
            @virtual
            def full_name(self):
                return f"{self.get('first')} {self.get('last')}"

            @full_name.setter
            def full_name(self, value):
                first, last = value.split(" ", 1)
                self.set("first", first)
                self.set("last", last)

        person = Person({"first": "Ada", "last": "Byron"})
        person.get("full_name")             # "Ada Byron"
        await person.save()                 # insert
        await person.save({"full_name": "Ada Lovelace"}, patch=True)
        # backend update receives {"first": "Ada", "last": "Lovelace"}
    """
    pass
