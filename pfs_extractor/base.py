'''Base provides basic firmware object structures.
'''

from .utils import sguid


class FirmwareObject(object):
    '''A pseudo-abstract type providing common firmware member facilities.'''

    def __init__(self):
        self.data = None
        self.name = None
        self.attrs = None
        self.guid = None

    @property
    def content(self):
        '''The object content is the 'data' stream.'''
        if getattr(self, "data", None) is not None:
            return bytes(self.data)
        return b""

    @property
    def objects(self):
        '''Objects are the child firmware objects found via 'processing'.'''
        return []

    @property
    def label(self):
        '''An overload for an object 'name'.'''
        if getattr(self, "name", None) is not None:
            return self.name
        return ""

    @property
    def guid_label(self):
        '''A string representation of an optional 'guid' field.'''
        if getattr(self, "guid", None) is None:
            return ""
        return sguid(self.guid)

    @property
    def type_label(self):
        '''The string representation of the object's class name.'''
        return self.__class__.__name__

    @property
    def attrs_label(self):
        '''An overload for the 'attrs' field.'''
        if getattr(self, "attrs", None) is not None:
            return self.attrs
        return {}

    def info(self, include_content=False):
        '''Firmware objects define a common interface for information.

        This defines: label, guid, type, content, attrs-- as common between
        most firmware objects.

        Args:
            include_content (Optional[bool]): Include a copy of the 'data'
            or content stream.

        Return:
            dict: Return a pointer to this object "_self" and the defines listed
                above with an optional copy of the data stream.
        '''
        return {
            "_self": self,
            "label": self.label,
            "guid": self.guid_label,
            "type": self.type_label,
            "content": self.content if include_content else b"",
            "attrs": self.attrs_label
        }

    def iterate_objects(self, include_content=False):
        '''Flatten this object's children into a list.

        Each object within the children list is recursively 'iterated',
        meaning its 'iterate_objects' method is called. The object is
        represented via the 'info' method. Access to the object is possible
        via the "_self" key.

        The output list does not include this object but each entry sets a
        "parent" key with a pointer to this object's info.

        Return:
            list: nested list of firmware object info dictionaries.
        '''
        objects = []
        for _object in self.objects:
            if _object is None:
                continue
            _info = _object.info(include_content)
            _info["objects"] = _object.iterate_objects(include_content)
            for _child in _info["objects"]:
                _child["parent"] = _info
            objects.append(_info)
        return objects


class RawObject(FirmwareObject):
    '''An opaque block of a section, e.g. a signature or metadata.'''

    def __init__(self, data, name=None):
        self.data = data
        self.name = name
        self.guid = None
        self.attrs = {"size": len(data)}
