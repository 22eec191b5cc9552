import datetime
from lzs import (
    OpaqueKey,
    Serializable,
    SerializeProperty,
    iso_datetime_from_document,
    iso_datetime_to_document,
    revive,
)

SECRET = OpaqueKey('secret')


class Tag(Serializable):
    name = SerializeProperty(default='')


class Account(Serializable):
    user_name = SerializeProperty('userName', default='anon')
    created = SerializeProperty(
        {'to_document': iso_datetime_to_document, 'from_document': iso_datetime_from_document},
        default_factory=datetime.datetime.now,
    )
    tags = SerializeProperty({'from_document': revive(Tag)}, default_factory=list)
    secret = SerializeProperty('secret', key=SECRET, default=None)


class AdminAccount(Account):
    # same field, new document key
    user_name = SerializeProperty('adminName', default='root')
    level = SerializeProperty(default=1)


if __name__ == '__main__':
    account = Account(user_name='ada', tags=[Tag(name='math')])
    account[SECRET] = 'hunter2'
    text = account.to_json()
    print('Account: ', text)
    print('Restored: ', Account.parse(text).tags[0].name)

    admin = AdminAccount.parse('{"userName": "ignored", "adminName": "grace", "level": 3}')
    print('Admin: ', admin.to_json())
