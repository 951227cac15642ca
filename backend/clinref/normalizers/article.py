from clinref.domain.fields import VERSIONED_FIELDS


def normalize_article(article):
    data = {"id": article.id}
    data.update({name: getattr(article, name) for name in VERSIONED_FIELDS})
    data.update({
        "author": article.author,
        "views": article.views,
        "created_at": article.created_at.isoformat() if article.created_at else None,
        "updated_at": article.updated_at.isoformat() if article.updated_at else None,
    })
    return data
